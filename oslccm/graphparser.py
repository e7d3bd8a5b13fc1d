##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging
import xml.sax

import lxml.etree as ET
import rdflib
import rdflib.exceptions
import rdflib.plugins.sparql

from . import httpops
from . import rdfxml

logger = logging.getLogger(__name__)

# all queries are prepared once at import, so a bad query fails immediately
def prepare_query(query):
    return rdflib.plugins.sparql.prepareQuery( query, initNs=rdfxml.RDF_DEFAULT_PREFIX )

# the string form of each URI bound to name, in result order without repeats
# literals and blank nodes are ignored
def uri_values(rows, name='url'):
    result = []
    for row in rows:
        value = row.get(name)
        if isinstance(value, rdflib.URIRef) and str(value) not in result:
            result.append(str(value))
    return result


class GraphParser():
    '''Parses RDF/XML response bodies into rdflib graphs and runs prepared SPARQL queries over them'''

    # returns an rdflib.Graph (which may be empty), or None when the body holds no usable RDF/XML
    def parse_to_graph(self, base_uri, body):
        # the fragment loses the <?xml?> declaration, so decode using its encoding first
        text = httpops.to_text( body, encoding=rdfxml.declared_encoding(body) )
        fragment = rdfxml.extract_rdf_fragment( text )
        if fragment is None:
            logger.warning( f"No RDF/XML found in response from {base_uri}" )
            return None
        data = fragment.encode('utf-8')
        try:
            ET.fromstring(data)
        except ET.XMLSyntaxError as e:
            logger.warning( f"RDF/XML from {base_uri} is not well-formed: {e}" )
            return None
        graph = rdflib.Graph()
        try:
            graph.parse( data=data, format="xml", publicID=base_uri )
        except (rdflib.exceptions.ParserError, xml.sax.SAXParseException) as e:
            logger.warning( f"RDF/XML from {base_uri} could not be parsed: {e}" )
            return None
        logger.debug( f"Parsed {len(graph)} triples from {base_uri}" )
        return graph

    def query(self, graph, prepared_query):
        if graph is None:
            return []
        rows = list( graph.query( prepared_query ) )
        logger.debug( f"Query returned {len(rows)} rows" )
        return rows
