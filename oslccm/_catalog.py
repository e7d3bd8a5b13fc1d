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

# providers may be typed inline in the catalog or just linked from it
PROVIDERS_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?url WHERE {
    { ?url rdf:type oslc:ServiceProvider }
    UNION
    { ?catalog oslc:serviceProvider ?url }
}""" )

SUBCATALOGS_QUERY = graphparser.prepare_query( """
SELECT DISTINCT ?url WHERE {
    { ?url rdf:type oslc:ServiceProviderCatalog }
    UNION
    { ?catalog oslc:serviceProviderCatalog ?url }
}""" )

class Catalog(_resource._Resource):
    '''
    An OSLC Service Provider Catalog - its entries describe service providers or out-of-line subcatalogs
    '''
    kind = 'Service Provider Catalog'

    def __init__(self, url):
        super().__init__(url)
        self.provider_urls = []
        self.subcatalog_urls = []

    def load(self, connection, parser):
        self.provider_urls = []
        self.subcatalog_urls = []
        if not self._retrieve(connection, parser):
            return False

        rows = parser.query( self.graph, PROVIDERS_QUERY )
        self.provider_urls = [u for u in graphparser.uri_values(rows) if rdfxml.is_absolute_uri(u)]

        rows = parser.query( self.graph, SUBCATALOGS_QUERY )
        self.subcatalog_urls = [u for u in graphparser.uri_values(rows) if rdfxml.is_absolute_uri(u) and u != self.url]

        logger.info( f"Catalog {self.url} lists {len(self.provider_urls)} service providers and {len(self.subcatalog_urls)} subcatalogs" )
        return True
