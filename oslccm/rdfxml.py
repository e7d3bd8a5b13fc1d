##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import codecs
import logging
import re

import lxml.etree as ET

logger = logging.getLogger(__name__)

# Some well-known and used RDF/XML prefixes for OSLC Change Management
RDF_DEFAULT_PREFIX = {
    'dc':               'http://purl.org/dc/elements/1.1/',
    'dcterms':          'http://purl.org/dc/terms/',
    'foaf':             'http://xmlns.com/foaf/0.1/',
    'ldp':              'http://www.w3.org/ns/ldp#',
    'oslc':             'http://open-services.net/ns/core#',
    'oslc_cm':          'http://open-services.net/ns/cm#',
    'oslc_cm_10':       'http://open-services.net/xmlns/cm/1.0/',
    'rdf':              'http://www.w3.org/1999/02/22-rdf-syntax-ns#',
    'rdfs':             'http://www.w3.org/2000/01/rdf-schema#',
    'rtc_cm':           'http://jazz.net/xmlns/prod/jazz/rtc/cm/1.0/',
    'xsd':              'http://www.w3.org/2001/XMLSchema#',
}

# Register prefixes to XML system
for prefix,uri in list(RDF_DEFAULT_PREFIX.items()):
    ET.register_namespace(prefix, uri)

# a server response may wrap the RDF/XML in other markup (e.g. an HTML page)
# the document is everything from the first <rdf opening tag to the first matching RDF close tag
_RDF_FRAGMENT_RE = re.compile( r"<rdf[\s:>].*?</(?:[\w.-]+:)?RDF\s*>", re.DOTALL )

# the encoding named by the <?xml ...?> declaration, which only counts at the very start of a document
_XML_ENCODING_RE = re.compile( rb"^(?:\xef\xbb\xbf)?\s*<\?xml[^>]*?\sencoding\s*=\s*[\x27\"]([A-Za-z][\w.-]*)[\x27\"]" )

_ABSOLUTE_URI_RE = re.compile( r"^https?://\S+$" )

# return the embedded <rdf:RDF>...</rdf:RDF> text of a response body, or None if there isn't one
def extract_rdf_fragment(text):
    if text is None:
        return None
    m = _RDF_FRAGMENT_RE.search(text)
    if m is None:
        logger.debug( "No RDF fragment found in body" )
        return None
    return m.group(0)

# return the (python codec name of the) encoding declared by a bytes body, or None if it declares none or an unknown one
def declared_encoding(body):
    if not isinstance(body, (bytes, bytearray)):
        return None
    m = _XML_ENCODING_RE.match(body)
    if m is None:
        return None
    name = m.group(1).decode('ascii')
    try:
        return codecs.lookup(name).name
    except LookupError:
        logger.warning( f"Unknown XML encoding {name} - using utf-8" )
        return None

# only http(s) URIs are followed when discovering resources
def is_absolute_uri(uri):
    if uri is None:
        return False
    return _ABSOLUTE_URI_RE.match(str(uri)) is not None

# The term "tag" usually refers to an ElementTree-style tag "{ns}id"
# The term "prefixed tag" refers to an XML namespaced tag like "ns:id"

# return the full uri for a tag like rdf:a or {rdf}a
def tag_to_uri(tag, prefix_map=RDF_DEFAULT_PREFIX,noexception=False):
    if tag is None:
        return None
    pos_colon = tag.find(':')
    if tag.find('/') < 0 and pos_colon >= 0:
        prefix = tag[:pos_colon]
        if prefix not in prefix_map:
            if not noexception:
                raise Exception("Prefix is not resolved: %s" % tag)
            else:
                return tag
        return prefix_map[prefix] + tag[pos_colon + 1:]
    # as the tag contains a / or does not contain :, simply remove the { } and return the resulting URI
    return tag.replace('{', '').replace('}', '')

