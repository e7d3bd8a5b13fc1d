##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##

# discover the change requests of an OSLC CM server: catalog -> service providers -> services -> change requests
# then print them, or save them to CSV

import argparse
import csv
import getpass
import json
import logging
import os
import socket
import sys
import time
import urllib.parse

import anytree
import cryptography.exceptions
import cryptography.fernet

from oslccm import _changerequest
from oslccm import client
from oslccm import connection
from oslccm import utils

logger = logging.getLogger(__name__)

############################################################################

def do_discover(inputargs=None):
    inputargs = inputargs or sys.argv[1:]

    # get some defaults from the environment (which can be overridden on the commandline or the saved obfuscated credentials)
    CMURL       = os.environ.get("OSLCCM_URL"       ,None )
    USER        = os.environ.get("OSLCCM_USER"      ,None )
    PASSWORD    = os.environ.get("OSLCCM_PASSWORD"  ,None )
    LOGLEVEL    = os.environ.get("OSLCCM_LOGLEVEL"  ,None )

    # setup arghandler
    parser = argparse.ArgumentParser(description="Discover the change requests of an OSLC Change Management server, following its catalog, service providers and services")

    parser.add_argument("-J", "--cmurl", default=CMURL, help=f"OSLC CM server base url - the catalog is <cmurl>/catalog - Default can be set using environment variable OSLCCM_URL")
    parser.add_argument("-U", "--username", default=USER, help=f"user id - Default can be set using environment variable OSLCCM_USER")
    parser.add_argument("-P", "--password", default=PASSWORD, help=f"user password - Default can be set using environment variable OSLCCM_PASSWORD - set to PROMPT to be asked for password at runtime")
    parser.add_argument('-L', '--loglevel', default=LOGLEVEL,help=f'Set logging on console and (if providing a , and a second level) to file to one of TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL, OFF - default is {LOGLEVEL} - can be set by environment variable OSLCCM_LOGLEVEL')
    parser.add_argument('-N', '--noprogressbar', action="store_false", help="Don't show progress bar while loading change requests")
    parser.add_argument('-O', '--outputfile', default=None, help='Name of file to save the change requests to as CSV')
    parser.add_argument('-T', '--nocerts', action="store_true", help="Don't verify SSL certificates")
    parser.add_argument('-Z', '--proxyport', default=connection.PROXY_PORT, type=int, help=f'Port for proxy default is {connection.PROXY_PORT} - used if found to be active - set to 0 to disable')
    parser.add_argument('-t', '--tree', action="store_true", help="Print the tree of discovered catalog, service providers, services and change requests")
    parser.add_argument('--timeout', default=None, type=float, help="Timeout in seconds for each HTTP request (default no timeout)")

    # saved credentials
    parser.add_argument('-0', '--savecreds', default=None, help="Save obfuscated credentials file for use with readcreds, then exit - this stores cmurl, username and password")
    parser.add_argument('-1', '--readcreds', default=None, help="Read obfuscated credentials from file - completely overrides commandline/environment values for cmurl, username and password" )
    parser.add_argument('-2', '--erasecreds', default=None, help="Wipe and delete obfuscated credentials file" )
    parser.add_argument('-3', '--secret', default="N0tSeCret-", help="SECRET used to encrypt and decrypt the obfuscated credentials (make this longer for greater security) - required if using -0 or -1" )
    parser.add_argument('-4', '--credspassword', action="store_true", help="Prompt user for a password to save/read obfuscated credentials (make this longer for greater security)" )

    args = parser.parse_args(inputargs)

    if args.erasecreds:
        # read the file to work out length
        with open(args.erasecreds,"rb") as f:
            contentlen = len(f.read())
        # create same-length random data to overwrite
        for i in range(5):
            with open(args.erasecreds,"w+b") as f:
                f.write(os.urandom(contentlen))
        # and delete the file
        os.remove(args.erasecreds)

        print( f"Credentials file {args.erasecreds} overwritten then removed" )
        return 0

    if args.credspassword:
        if args.readcreds is None and args.savecreds is None:
            raise Exception( "When using -4 you must use -0 to specify a file to save credentials into, and/or -1 to specify a credentials file to read" )
        #make sure the user enters at least one character
        credspassword = ""
        while len(credspassword)<1:
            credspassword = getpass.getpass( "Password (>0 chars, longer is more secure)?" )
    else:
        credspassword = "N0tSecretAtAll"

    if args.readcreds:
        try:
            with open(args.readcreds,"rb") as f:
                token = f.read()
            args.username,args.password,args.cmurl = json.loads( utils.fernet_decrypt(token,"=-=".join([socket.getfqdn(),os.path.abspath(args.readcreds),os.getcwd(),getpass.getuser(),args.secret,credspassword])) )
        except (cryptography.exceptions.InvalidSignature,cryptography.fernet.InvalidToken, TypeError):
            raise Exception( f"Unable to decrypt credentials from {args.readcreds}" )
        print( f"Credentials file {args.readcreds} read" )

    if args.savecreds:
        if args.secret is None:
            raise Exception( "You MUST specify a secret using -3 or --secret if using -0/--savecreds" )
        with open(args.savecreds,"wb") as f:
            f.write(utils.fernet_encrypt(json.dumps([args.username,args.password,args.cmurl]).encode(),"=-=".join([socket.getfqdn(),os.path.abspath(args.savecreds),os.getcwd(),getpass.getuser(),args.secret,credspassword]),utils.ITERATIONS))
        print( f"Credentials file {args.savecreds} created" )
        return 0

    # setup logging
    if args.loglevel is not None:
        consolelevel,filelevel = utils.parse_loglevels(args.loglevel, default_filelevel=logging.DEBUG)
        utils.setup_logging(consolelevel=consolelevel,filelevel=filelevel)

    if not args.cmurl:
        raise Exception( "You must specify the OSLC CM server url using -J or environment variable OSLCCM_URL" )

    if args.password == "PROMPT":
        args.password = getpass.getpass(prompt=f'Password for user {args.username}: ')

    # do a basic check that the target server is in fact running, this way we can give a clear error message
    urlparts = urllib.parse.urlsplit(args.cmurl)
    if urlparts.scheme not in ['http','https']:
        raise Exception( f"Unknown scheme in cmurl {args.cmurl}" )
    serverport = urlparts.port or ( 443 if urlparts.scheme=='https' else 80 )
    if not connection.tcp_can_connect_to_url(urlparts.hostname, serverport, timeout=2.0):
        raise Exception( f"Server not contactable {args.cmurl}" )

    # request proxy config if appropriate
    if args.proxyport != 0:
        connection.setupproxy(args.cmurl,proxyport=args.proxyport)

    logger.info( f"Discovering change requests from {args.cmurl}" )
    theclient = client.Client( args.cmurl, args.username, args.password, verifysslcerts=not args.nocerts, timeout=args.timeout )

    changerequests = theclient.discover_all( progressbar=args.noprogressbar )

    if theclient.catalog is None or theclient.catalog.body is None:
        print( f"No catalog available at {theclient.connection.catalog_url}" )

    if args.tree:
        root = theclient.discovery_tree()
        if root is not None:
            for pre, _, node in anytree.RenderTree(root, style=anytree.AsciiStyle()):
                print( f"{pre}{node.name}" )

    columns = ['url']+list(_changerequest.PROPERTIES.keys())
    if args.outputfile:
        with open(args.outputfile, "w", newline='', encoding='utf-8') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=columns)
            writer.writeheader()
            for cr in changerequests:
                writer.writerow(cr.as_dict())
        print( f"Saved {len(changerequests)} change requests to {args.outputfile}" )
    else:
        rows = [['identifier','title','status','modified','url']]
        for cr in changerequests:
            rows.append( [cr.identifier or "", cr.title or "", cr.status or "", cr.modified or "", cr.url] )
        print( utils.print_in_columns(rows) )

    print( f"Found {len(theclient.providers)} service providers and {len(changerequests)} change requests" )
    return 0

def main():
    runstarttime = time.perf_counter()
    result = do_discover(sys.argv[1:])
    elapsedsecs = time.perf_counter() - runstarttime
    print( f"Runtime was {int(elapsedsecs/60)}m {int(elapsedsecs%60):02d}s" )
    return result

if __name__ == '__main__':
    main()
