##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging

from . import _resource
from . import _service
from . import graphparser
from . import rdfxml

logger = logging.getLogger(__name__)

#################################################################################################

SERVICES_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?url WHERE {
    ?url rdf:type oslc:Service
}""" )

TITLE_QUERY = graphparser.prepare_query( """
SELECT ?provider ?title WHERE {
    ?provider dcterms:title ?title
}""" )

class ServiceProvider(_resource._Resource):
    '''
    An OSLC CM Service Provider - a server-side implementation exposing one or more Services
    '''
    kind = 'Service Provider'

    def __init__(self, url):
        super().__init__(url)
        self.title = None
        self.service_urls = []
        self.services = []

    def load(self, connection, parser):
        self.title = None
        self.service_urls = []
        self.services = []
        if not self._retrieve(connection, parser):
            return False

        titles = self._rows_about_self( parser.query( self.graph, TITLE_QUERY ), 'provider' )
        if titles:
            self.title = str(titles[0].get('title'))

        for service_url in graphparser.uri_values( parser.query( self.graph, SERVICES_QUERY ) ):
            # the provider itself sometimes claims to be a Service
            if not rdfxml.is_absolute_uri(service_url) or service_url == self.url:
                logger.debug( f"Ignoring service {service_url} of {self.url}" )
                continue
            self.service_urls.append(service_url)

        for service_url in self.service_urls:
            service = _service.Service(service_url)
            service.load(connection, parser)
            self.services.append(service)

        logger.info( f"Service provider {self.url} has {len(self.services)} services" )
        return True
