##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


from .connection import *
from .graphparser import *
from ._catalog import *
from ._serviceprovider import *
from ._service import *
from ._changerequest import *
from .client import *
from . import __meta__

__app__ = __meta__.app
__version__ = __meta__.version
__license__ = __meta__.license
__author__ = __meta__.author
