##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging

import rdflib

from . import _resource
from . import graphparser
from . import rdfxml
from . import utils

logger = logging.getLogger(__name__)

#################################################################################################

# attribute name -> the OSLC CM / Dublin Core property it is loaded from
PROPERTIES = {
    'identifier':   'dcterms:identifier',
    'title':        'dcterms:title',
    'creator':      'dcterms:creator',
    'description':  'dcterms:description',
    'created':      'dcterms:created',
    'modified':     'dcterms:modified',
    'status':       'oslc_cm:status',
}

ATTRIBUTES_QUERY = graphparser.prepare_query( """
SELECT ?cr ?property ?value WHERE {
    VALUES ?property { dcterms:identifier dcterms:title dcterms:creator dcterms:description dcterms:created dcterms:modified oslc_cm:status }
    ?cr ?property ?value .
}""" )

class ChangeRequest(_resource._Resource):
    '''An OSLC CM Change Request'''
    kind = 'Change Request'

    def __init__(self, url):
        super().__init__(url)
        self.identifier = None
        self.title = None
        self.creator = None
        self.description = None
        self.created = None
        self.modified = None
        self.status = None

    def load(self, connection, parser):
        for attr in PROPERTIES:
            setattr(self, attr, None)
        if not self._retrieve(connection, parser):
            return False

        byproperty = {rdfxml.tag_to_uri(tag): attr for attr,tag in PROPERTIES.items()}
        for row in self._rows_about_self( parser.query( self.graph, ATTRIBUTES_QUERY ), 'cr' ):
            attr = byproperty.get( str(row.get('property')) )
            value = row.get('value')
            # first value wins; a blank node (e.g. an inline foaf:Person) has no useful string form
            if attr is None or getattr(self, attr) is not None or isinstance(value, rdflib.BNode):
                continue
            setattr(self, attr, str(value))
        logger.debug( f"Loaded change request {self.url} {self.identifier=} {self.title=}" )
        return True

    @property
    def created_datetime(self):
        return utils.xsd_to_datetime(self.created)

    @property
    def modified_datetime(self):
        return utils.xsd_to_datetime(self.modified)

    def as_dict(self):
        result = {'url': self.url}
        for attr in PROPERTIES:
            result[attr] = getattr(self, attr)
        return result
