##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging

import anytree
import tqdm

from . import _catalog
from . import _changerequest
from . import _serviceprovider
from . import connection
from . import graphparser
from . import rdfxml

logger = logging.getLogger(__name__)

#################################################################################################

MEMBERS_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?url WHERE {
    ?d rdfs:member ?url
}""" )

# the client has two principal purposes:
# 1) to hold the connection to the OSLC CM server, i.e. its URL and login user and password
# 2) to walk catalog -> service providers -> services -> change requests, one GET at a time

class Client():
    def __init__(self, baseurl, username, password, *, verifysslcerts=True, timeout=None):
        logger.info( f"Creating client for {baseurl}" )
        self.connection = connection.Connection( baseurl, username, password, verifysslcerts=verifysslcerts, timeout=timeout )
        self.parser = graphparser.GraphParser()
        self.catalog = None
        self.subcatalogs = []
        self.providers = []
        self.changerequests = []
        self._members = []  # (service, [changerequests]) in discovery order

    def discover_all(self, progressbar=False):
        self.catalog = None
        self.subcatalogs = []
        self.providers = []
        self.changerequests = []
        self._members = []

        self.catalog = _catalog.Catalog( self.connection.catalog_url )
        if not self.catalog.load( self.connection, self.parser ):
            logger.warning( f"No catalog available at {self.catalog.url}" )
            return self.changerequests

        for provider_url in self._provider_urls():
            provider = _serviceprovider.ServiceProvider( provider_url )
            provider.load( self.connection, self.parser )
            self.providers.append( provider )

        for provider, service in self.services():
            if not service.query_base:
                logger.info( f"Service {service.url} has no query base - skipped" )
                continue
            found = [_changerequest.ChangeRequest(u) for u in self.list_member_urls( service.query_base[0] )]
            self._members.append( (service, found) )
            self.changerequests.extend( found )

        logger.info( f"Loading {len(self.changerequests)} change requests" )
        with tqdm.tqdm(initial=0, total=len(self.changerequests),smoothing=1,unit=" results",desc="Loading change requests",disable=not progressbar) as pbar:
            for cr in self.changerequests:
                cr.load( self.connection, self.parser )
                pbar.update(1)

        return self.changerequests

    # the member URLs listed by a query base, or [] if it can't be retrieved
    def list_member_urls(self, query_base):
        body, ok = self.connection.fetch( query_base, intent="Retrieve change request members of query base" )
        if not ok:
            logger.warning( f"No members available from {query_base}" )
            return []
        graph = self.parser.parse_to_graph( query_base, body )
        rows = self.parser.query( graph, MEMBERS_QUERY )
        return [u for u in graphparser.uri_values(rows) if rdfxml.is_absolute_uri(u)]

    # every (provider, service) pair in discovery order
    def services(self):
        for provider in self.providers:
            for service in provider.services:
                yield (provider, service)

    # provider urls of the catalog then of each subcatalog (depth-first), each catalog and provider visited once
    def _provider_urls(self):
        seen_catalogs = [self.catalog.url]
        seen_providers = []
        stack = [self.catalog]
        while stack:
            catalog = stack.pop(0)
            for provider_url in catalog.provider_urls:
                if provider_url not in seen_providers:
                    seen_providers.append(provider_url)
                    yield provider_url
            subcatalogs = []
            for subcatalog_url in catalog.subcatalog_urls:
                if subcatalog_url in seen_catalogs:
                    continue
                seen_catalogs.append(subcatalog_url)
                subcatalog = _catalog.Catalog( subcatalog_url )
                if subcatalog.load( self.connection, self.parser ):
                    self.subcatalogs.append( subcatalog )
                    subcatalogs.append( subcatalog )
            stack = subcatalogs + stack

    # an anytree tree of what the last discover_all() found, for display
    def discovery_tree(self):
        if self.catalog is None:
            return None
        root = anytree.Node( self.catalog.url, kind='catalog', resource=self.catalog )
        servicenodes = {}
        for provider in self.providers:
            providernode = anytree.Node( provider.title or provider.url, parent=root, kind='provider', resource=provider )
            for service in provider.services:
                servicenodes[id(service)] = anytree.Node( service.url, parent=providernode, kind='service', resource=service )
        for service, found in self._members:
            for cr in found:
                label = f"{cr.identifier}: {cr.title}" if cr.identifier else cr.url
                anytree.Node( label, parent=servicenodes[id(service)], kind='changerequest', resource=cr )
        return root
