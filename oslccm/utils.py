##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##

import base64
import datetime
import logging
import os

import cryptography.fernet
import cryptography.hazmat.backends
import cryptography.hazmat.primitives
import cryptography.hazmat.primitives.hashes
import cryptography.hazmat.primitives.kdf.pbkdf2
import dateutil.parser
import pytz

logger = logging.getLogger(__name__)

############################################################################
# setup logging

LOGFOLDER = './logs'

# below DEBUG - used for the full wire dump of each HTTP request/response
TRACE = 5
logging.addLevelName(TRACE, 'TRACE')

loglevels = {
        'TRACE':        TRACE
        ,'DEBUG':       logging.DEBUG
        ,'INFO':        logging.INFO
        ,'WARNING':     logging.WARNING
        ,'ERROR':       logging.ERROR
        ,'CRITICAL':    logging.CRITICAL
        ,'OFF':         None
        }

# turn a loglevel string like "INFO" or "DEBUG,TRACE" into (consolelevel, filelevel)
def parse_loglevels(loglevel, default_filelevel=None):
    levels = [loglevels.get(l.strip().upper(),-1) for l in loglevel.split(",",1)]
    if len(levels)<2:
        levels.append(default_filelevel)
    if -1 in levels:
        raise Exception( f'Logging level {loglevel} not valid - should be comma-separated one or two values from TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL, OFF' )
    return (levels[0],levels[1])

def setup_logging(consolelevel=None, filelevel=logging.INFO):
    if filelevel is not None or consolelevel is not None:
        # set default logging level
        log = logging.getLogger()  # init the root logger
        log.setLevel(TRACE)

        if filelevel is not None:
            # make sure logs folder exists for logging output
            os.makedirs(LOGFOLDER, exist_ok=True)

            # make a formatter to use for the file logs
            filelogformatter = logging.Formatter("%(asctime)s [%(levelname)-5s|%(name)s] %(message)s")

            datetimestamp = '{:%Y%m%d-%H%M%S}'.format(datetime.datetime.now())

            # file handler gets *all* log messages
            handler = logging.FileHandler(os.path.join(LOGFOLDER,f"oslccm-{datetimestamp}.log"), mode='w')
            handler.setLevel(filelevel)
            handler.setFormatter(filelogformatter)
            log.addHandler(handler)

        if consolelevel is not None:
            # define a Handler which writes messages to the sys.stderr
            console = logging.StreamHandler()
            console.setLevel(consolelevel)
            # set a format which is simpler for console use
            formatter = logging.Formatter('%(name)-12s: %(levelname)-8s %(message)s')
            console.setFormatter(formatter)
            log.addHandler(console)

############################################################################
# XSD date/time values from OSLC resources e.g. dcterms:created

# returns a timezone-aware datetime, or None if the value can't be parsed
# a value without a timezone is taken as UTC
def xsd_to_datetime(xsdtime):
    if xsdtime is None:
        return None
    try:
        dt = dateutil.parser.isoparse(str(xsdtime).strip())
    except (ValueError, OverflowError) as e:
        logger.error( f"Error at parsing XSD time {xsdtime!r}: {e}" )
        return None
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt

############################################################################
# code to support obfuscated credentials files

ITERATIONS = 100000

def _derive_key(password, salt, iterations = ITERATIONS):
    kdf =  cryptography.hazmat.primitives.kdf.pbkdf2.PBKDF2HMAC(
        algorithm=cryptography.hazmat.primitives.hashes.SHA256(), length=32, salt=salt,
        iterations=iterations, backend=cryptography.hazmat.backends.default_backend())
    return base64.urlsafe_b64encode(kdf.derive(password))

def fernet_encrypt(message, password, iterations = ITERATIONS):
    salt = os.urandom(16)
    key = _derive_key(password.encode(), salt, iterations)
    return base64.urlsafe_b64encode( b'%b%b%b' % ( salt, iterations.to_bytes(4, 'big'), base64.urlsafe_b64decode( cryptography.fernet.Fernet(key).encrypt(message)), ) )

def fernet_decrypt(token, password):
    decoded = base64.urlsafe_b64decode(token)
    salt, iter, token = decoded[:16], decoded[16:20], base64.urlsafe_b64encode(decoded[20:])
    iterations = int.from_bytes(iter, 'big')
    key = _derive_key(password.encode(), salt, iterations)
    return  cryptography.fernet.Fernet(key).decrypt(token)

#####################################################################################
# based on https://stackoverflow.com/a/12065663/2318649
def print_in_columns( rows ):
    result = ""
    if not rows:
        return result
    colcount = max([len(row) for row in rows])
    rows = [[str(val) for val in row] + ['']*(colcount-len(row)) for row in rows]
    widths = [max(map(len, col)) for col in zip(*rows)]
    # ensure the final column doesn't have spaces added on the end
    widths[-1]=0
    for row in rows:
        result += "  ".join((val.ljust(width) for val, width in zip(row, widths)))+"\n"
    return result
