##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##

# canned OSLC CM documents and a stand-in for requests.Session.send which serves them

import http.client
import unittest.mock

import requests
import requests.structures

BASE = "https://cm.example.com"
CATALOG = BASE + "/catalog"
PROVIDER1 = BASE + "/provider/1"
PROVIDER2 = BASE + "/provider/2"
SERVICE1 = PROVIDER1 + "/service/cm"
SERVICE2 = PROVIDER2 + "/service/cm"
QUERYBASE1 = PROVIDER1 + "/changerequests"
QUERYBASE2 = PROVIDER2 + "/changerequests"
CR1 = BASE + "/cr/1"
CR2 = BASE + "/cr/2"
CR3 = BASE + "/cr/3"

NAMESPACES = ' '.join( [
    'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"',
    'xmlns:rdfs="http://www.w3.org/2000/01/rdf-schema#"',
    'xmlns:oslc="http://open-services.net/ns/core#"',
    'xmlns:oslc_cm="http://open-services.net/ns/cm#"',
    'xmlns:dcterms="http://purl.org/dc/terms/"',
    ] )

def rdf(content):
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<rdf:RDF {NAMESPACES}>\n{content}\n</rdf:RDF>\n'.encode('utf-8')

# re-encode a document built by rdf() as ISO-8859-1, declaring that encoding
def latin1(document):
    text = document.decode('utf-8').replace( 'encoding="UTF-8"', 'encoding="ISO-8859-1"', 1 )
    return text.encode('latin-1')

def catalog_doc(*provider_urls, subcatalogs=(), url=CATALOG):
    providers = "\n".join( f'    <oslc:serviceProvider><oslc:ServiceProvider rdf:about="{u}"/></oslc:serviceProvider>' for u in provider_urls )
    subs = "\n".join( f'    <oslc:serviceProviderCatalog rdf:resource="{u}"/>' for u in subcatalogs )
    return rdf( f'''  <oslc:ServiceProviderCatalog rdf:about="{url}">
    <dcterms:title>Example catalog</dcterms:title>
{providers}
{subs}
  </oslc:ServiceProviderCatalog>''' )

def provider_doc(url, *service_urls, title=None, selftyped=False):
    services = "\n".join( f'    <oslc:service><oslc:Service rdf:about="{u}"/></oslc:service>' for u in service_urls )
    selftype = '    <rdf:type rdf:resource="http://open-services.net/ns/core#Service"/>' if selftyped else ''
    titletag = f'    <dcterms:title>{title}</dcterms:title>' if title else ''
    return rdf( f'''  <oslc:ServiceProvider rdf:about="{url}">
{titletag}
{selftype}
{services}
  </oslc:ServiceProvider>''' )

def service_doc(url, *query_bases, creation=None):
    capabilities = "\n".join( f'''    <oslc:queryCapability>
      <oslc:QueryCapability>
        <oslc:queryBase rdf:resource="{qb}"/>
        <oslc:resourceShape rdf:resource="{BASE}/shapes/changerequest"/>
      </oslc:QueryCapability>
    </oslc:queryCapability>''' for qb in query_bases )
    factory = f'''    <oslc:creationFactory>
      <oslc:CreationFactory>
        <oslc:creation rdf:resource="{creation}"/>
        <oslc:resourceShape rdf:resource="{BASE}/shapes/changerequest-create"/>
      </oslc:CreationFactory>
    </oslc:creationFactory>''' if creation else ''
    return rdf( f'''  <oslc:Service rdf:about="{url}">
    <oslc:domain rdf:resource="http://open-services.net/ns/cm#"/>
{capabilities}
{factory}
  </oslc:Service>''' )

def members_doc(url, *member_urls):
    members = "\n".join( f'    <rdfs:member rdf:resource="{u}"/>' for u in member_urls )
    return rdf( f'''  <rdf:Description rdf:about="{url}">
{members}
  </rdf:Description>''' )

def changerequest_doc(url, identifier, title, status="Open"):
    return rdf( f'''  <oslc_cm:ChangeRequest rdf:about="{url}">
    <dcterms:identifier>{identifier}</dcterms:identifier>
    <dcterms:title>{title}</dcterms:title>
    <dcterms:creator rdf:resource="{BASE}/users/alice"/>
    <dcterms:description>Details of {title}</dcterms:description>
    <dcterms:created rdf:datatype="http://www.w3.org/2001/XMLSchema#dateTime">2012-05-03T10:15:00Z</dcterms:created>
    <dcterms:modified rdf:datatype="http://www.w3.org/2001/XMLSchema#dateTime">2012-05-04T08:00:00+02:00</dcterms:modified>
    <oslc_cm:status>{status}</oslc_cm:status>
  </oslc_cm:ChangeRequest>''' )

# the documents for a server with one provider, one service and two change requests
def single_provider_documents():
    return {
        CATALOG:    catalog_doc( PROVIDER1 ),
        PROVIDER1:  provider_doc( PROVIDER1, SERVICE1, title="Provider one" ),
        SERVICE1:   service_doc( SERVICE1, QUERYBASE1, creation=QUERYBASE1 + "/create" ),
        QUERYBASE1: members_doc( QUERYBASE1, CR1, CR2 ),
        CR1:        changerequest_doc( CR1, "1", "Crash on startup" ),
        CR2:        changerequest_doc( CR2, "2", "Typo in dialog", status="Closed" ),
    }


class StubServer():
    '''Serves canned documents by URL - anything unknown is a 404'''
    def __init__(self, documents=None):
        self.documents = {}
        self.requests = []
        for url,body in (documents or {}).items():
            self.add(url, body)

    def add(self, url, body, status=200, headers=None):
        self.documents[url] = (status, body, headers or {})

    def fail(self, url, status=404):
        self.documents[url] = (status, b"<html><body>Not here</body></html>", {})

    def requested_urls(self):
        return [r.url for r in self.requests]

    def send(self, prepped, **kwargs):
        self.requests.append(prepped)
        status, body, headers = self.documents.get( prepped.url, (404, b"Not found", {}) )
        response = requests.Response()
        response.status_code = status
        response.reason = http.client.responses.get(status, "")
        response._content = body
        response.url = prepped.url
        response.request = prepped
        response.encoding = 'utf-8'
        response.headers = requests.structures.CaseInsensitiveDict( {'Content-Type': 'application/rdf+xml', **headers} )
        return response

    # patch the connection's session so its requests come here
    def serve(self, connection):
        return unittest.mock.patch.object( connection._session, "send", side_effect=self.send )
