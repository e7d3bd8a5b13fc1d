##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging

from . import _resource
from . import graphparser
from . import rdfxml

logger = logging.getLogger(__name__)

#################################################################################################

# each capability hangs off the Service through an intermediate node - e.g. the oslc:QueryCapability
QUERYBASE_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?service ?url WHERE {
    ?service oslc:queryCapability ?capability .
    ?capability oslc:queryBase ?url .
}""" )

QUERYSHAPE_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?service ?url WHERE {
    ?service oslc:queryCapability ?capability .
    ?capability oslc:resourceShape ?url .
}""" )

FACTORYSHAPE_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?service ?url WHERE {
    ?service oslc:creationFactory ?factory .
    ?factory oslc:resourceShape ?url .
}""" )

CREATION_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?service ?url WHERE {
    ?service oslc:creationFactory ?factory .
    ?factory oslc:creation ?url .
}""" )

class Service(_resource._Resource):
    '''
    An OSLC Service - the query capabilities, creation factories and resource shapes for one domain.

    All the list attributes keep every match because a Service may have more than one Query Capability;
    query_base[0] is the one used to list change requests.
    '''
    kind = 'Service'

    def __init__(self, url):
        super().__init__(url)
        self.query_base = []
        self.resource_shape = []
        self.factory_resource_shape = []
        self.creation_factory = []

    def load(self, connection, parser):
        self.query_base = []
        self.resource_shape = []
        self.factory_resource_shape = []
        self.creation_factory = []
        if not self._retrieve(connection, parser):
            return False

        self.query_base = self._capability_urls(parser, QUERYBASE_QUERY)
        self.resource_shape = self._capability_urls(parser, QUERYSHAPE_QUERY)
        self.factory_resource_shape = self._capability_urls(parser, FACTORYSHAPE_QUERY)
        self.creation_factory = self._capability_urls(parser, CREATION_QUERY)

        logger.info( f"Service {self.url} {self.query_base=} {self.creation_factory=}" )
        return True

    # when the document describes this service by its own URI only use its capabilities,
    # otherwise (e.g. the service is a blank node in the document) use them all
    def _capability_urls(self, parser, query):
        rows = parser.query( self.graph, query )
        mine = self._rows_about_self( rows, 'service' )
        if mine:
            rows = mine
        return [u for u in graphparser.uri_values(rows) if rdfxml.is_absolute_uri(u)]
