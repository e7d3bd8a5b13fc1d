##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import logging
import socket

import requests
import urllib3

from . import httpops

logger = logging.getLogger(__name__)

# this port will be checked for a proxy - if it is there, it will be used for all requests
# (The default proxy port for Telerik Fiddler is 8888)
PROXY_PORT = 8888

# this is the default proxy dictionary for Requests - set by setupproxy()
proxydict = None

##############################################################################################

def setupproxy(url,proxyport=PROXY_PORT):
    # If a proxy is running on proxyport, setup proxydict so requests uses the proxy
    global proxydict
    if proxydict is None and proxyport!=0:
        # test if proxy is running
        if tcp_can_connect_to_url('127.0.0.1', proxyport, timeout=2.0):
            # insert the proxy dictionary
            proxydict = {
                            'https':'http://127.0.0.1:'+str(proxyport)
                            ,'http':'http://127.0.0.1:'+str(proxyport)
                        }
            logger.info( f'Setting proxy to {proxydict} for {url}' )

# utility to see if a port is active listening for connections
def tcp_can_connect_to_url(host, port, timeout=5):
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False

# the catalog lives at <base>/catalog - don't double up a trailing slash
def make_catalog_url(baseurl):
    if baseurl.endswith('/'):
        return baseurl + "catalog"
    return baseurl + "/catalog"

#################################################################################################

# The connection holds the endpoint and the basic-auth credentials, and one requests session
# which is reused for every GET of the discovery

class Connection():
    def __init__(self, baseurl, username, password, *, verifysslcerts=True, timeout=None):
        missing = [name for name,value in (('baseurl',baseurl),('username',username),('password',password)) if not value]
        if missing:
            raise Exception( f"Connection needs a base URL, username and password - missing {', '.join(missing)}" )
        logger.info( f"Creating connection {baseurl=} {username=} {verifysslcerts=} {timeout=}" )
        self.baseurl = baseurl
        self.username = username
        self.timeout = timeout
        self.verifysslcerts = verifysslcerts

        self._session = requests.Session()
        self._session.auth = (username, password)
        self._session.verify = verifysslcerts
        if proxydict is not None:
            self._session.proxies = proxydict
        if not verifysslcerts:
            # quietly allow the unverified connections the caller asked for
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @property
    def catalog_url(self):
        return make_catalog_url(self.baseurl)

    # GET url with basic auth
    # returns (body, True) for a 2xx response, or (None, False) after logging why not
    def fetch(self, url, accept=httpops.RDF_XML, *, intent=None):
        headers = {'Accept': accept, 'OSLC-Core-Version': '2.0'}
        request = httpops.HttpRequest( self._session, 'GET', url, headers=headers )
        try:
            response = request.execute( intent=intent, timeout=self.timeout )
        except requests.RequestException as e:
            logger.warning( f"GET {url} failed: {e}" )
            return (None, False)
        if not 200 <= response.status_code < 300:
            logger.warning( f"GET {url} returned {response.status_code} {response.reason}" )
            return (None, False)
        logger.debug( f"GET {url} returned {response.status_code} {len(response.content)} bytes" )
        return (response.content, True)

    def close(self):
        self._session.close()
