##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import codecs
import inspect
import logging
import os
import re

import requests

from . import utils

logger = logging.getLogger(__name__)

RDF_XML = 'application/rdf+xml'

# headers whose values must never appear in the logs
REDACTED_HEADERS = ['authorization', 'cookie', 'set-cookie']

##############################################################################################
# utilities for text<>binary and encoding handling

# find the encoding of a response
def find_encoding(response, encoding):
    if encoding is None and isinstance(response, requests.Response):
        encoding = response.encoding
    elif encoding is not None and not isinstance(encoding, str):
        raise Exception('Unknown encoding type [%s]' % encoding)
    if encoding is None:
        encoding = 'utf-8'  # default
    if "7bit" == encoding:
        encoding = 'us-ascii'
    return encoding

# decode response text
def to_text(response, encoding=None, errors='replace'):
    if response is None or isinstance(response, str):
        return response

    if isinstance(response, requests.Response):
        return response.text

    encoding = find_encoding(response, encoding)

    if isinstance(response, bytes) or isinstance(response, bytearray):
        content = response
    else:
        raise Exception( f"Can't convert {type(response)} to text" )

    return codecs.decode(content, encoding=encoding, errors=errors)


class HttpRequest():
    def __init__(self, session, verb, uri, *, headers=None):
        self._req = requests.Request( verb, uri, headers=headers )
        self._session = session

    # send the request once - no retries, redirects are whatever the session does by default
    # raises requests.RequestException for transport failures; HTTP error statuses are returned to the caller
    def execute( self, *, intent=None, timeout=None ):
        intent = intent or ""
        prepped = self._session.prepare_request( self._req )
        response = self._session.send( prepped, timeout=timeout )
        self.log_redirection_history( response, intent=intent )
        return response

    # log a request/response, which may be the result of one or more redirections, so first log each of their request/response
    def log_redirection_history( self, response, intent ):
        if not logger.isEnabledFor(utils.TRACE):
            return
        thisintent = intent
        after = ""
        for i,r in enumerate(response.history):
            after= " (after redirects)"
            logger.log( utils.TRACE, f"\nWIRE: redir {i} request +++++ {r.request.method} {r.request.url}\n\n{self._log_request(r.request,intent=thisintent)}")
            logger.log( utils.TRACE, f"\nWIRE: redir response ----- {r.status_code}\n\n{self._log_response(r)}")
            thisintent = 'Redirection of '+intent
        logger.log( utils.TRACE, f"\nWIRE: request +++++ {response.request.method} {response.request.url}\n\n{self._log_request(response.request,intent=intent+after)}")
        logger.log( utils.TRACE, f"\nWIRE: response ----- {response.status_code}\n\n{self._log_response(response)}")

    # generate a string for logging of a http request with a stacktrace of the callers and showing URL and headers
    def _log_request( self, request, intent=None ):
        logtext = self._callers()
        # this allows splitting out each request+response when parsing the log
        logtext += "\n\n>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>>!\n"
        if intent:
            logtext += f"\n\nINTENT: {intent}\n\n"
        logtext += f"{request.method} {request.url}\n"
        for k in sorted(request.headers.keys()):
            if k.lower() in REDACTED_HEADERS:
                logtext += "  " + k + ": REDACTED\n"
            else:
                logtext += "  " + k + ": " + to_text(request.headers[k]) + "\n"
        return logtext

    # generate a compact stacktrace of function-line-file because it's often
    # helpful to know how the HTTP operation was called
    def _callers( self ):
        caller_list = []
        # get the stacktrace and do a couple of f_back-s to remove the call to this function and to the _log_request() function
        frame = inspect.currentframe().f_back.f_back
        while frame.f_back:
            caller_list.append(
                '{2}:{1}:{0}()'.format(frame.f_code.co_name, frame.f_lineno, os.path.basename(frame.f_code.co_filename)))
            frame = frame.f_back
        callers = ' <= '.join(caller_list)
        return callers

    # generate a string for logging of a http response showing response code, headers and any data
    def _log_response( self, response ):
        logtext = f"Response: {response.status_code}\n"
        for c,v in sorted(response.headers.items()):
            if c.lower() in REDACTED_HEADERS:
                logtext += "  " + c + ": REDACTED\n"
            else:
                logtext += "  " + c + ": " + v + "\n"

        # add the body
        if response.content is not None:
            if len(response.content) > 1000000:
                rawtext = "LONG LONG CONTENT..."
            else:
                rawtext = repr(response.content)[2:-1]
                if len(rawtext) > 0:
                    if rawtext[0] == '<' or rawtext[0] == '{':
                        rawtext = re.sub(r"\\r", "", rawtext)
                        rawtext = re.sub(r"\\n", "\n", rawtext)
                        rawtext = re.sub(r"\\t", "    ", rawtext)
            # the surroundings allow splitting out the response body when parsing the log
            logtext += "\n::::::::::@\n"
            logtext += rawtext
            logtext += "\n----------@\n\n"

        # this allows splitting out each request+response when parsing the log
        logtext += "<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<<!\n"
        return logtext
