##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##

import pytest

from oslccm import connection
from oslccm import graphparser
from oslccm.tests import stubserver


@pytest.fixture
def conn():
    c = connection.Connection( stubserver.BASE, "alice", "s3cret" )
    yield c
    c.close()


@pytest.fixture
def parser():
    return graphparser.GraphParser()


@pytest.fixture
def server(conn):
    stub = stubserver.StubServer()
    with stub.serve(conn):
        yield stub
