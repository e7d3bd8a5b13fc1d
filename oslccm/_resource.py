##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging

import rdflib

logger = logging.getLogger(__name__)

#################################################################################################

class _Resource():
    'A generic OSLC resource retrieved as RDF/XML'
    kind = 'OSLC resource'

    def __init__(self, url):
        self.url = url
        self.body = None  # the raw bytes of the last successful GET
        self.graph = None  # only set once the body has been parsed

    # GET and parse this resource - returns False if nothing could be retrieved
    def _retrieve(self, connection, parser):
        self.body = None
        self.graph = None
        logger.info( f"Loading {self.kind} {self.url}" )
        body, ok = connection.fetch( self.url, intent=f"Retrieve {self.kind}" )
        if not ok:
            logger.warning( f"No {self.kind} available from {self.url}" )
            return False
        self.body = body
        self.graph = parser.parse_to_graph( self.url, body )
        return True

    # keep only the rows whose subject variable is this resource
    def _rows_about_self(self, rows, name):
        me = rdflib.URIRef(self.url)
        return [row for row in rows if row.get(name) == me]

    def __repr__(self):
        return f"<{type(self).__name__} {self.url}>"
