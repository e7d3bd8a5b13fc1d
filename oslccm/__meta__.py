#!/usr/bin/env python
# -*- coding: UTF-8 -*-

##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


app = 'oslccm'
description = 'OSLC Change Management discovery client - catalog, service providers, services and change requests'
version = '0.1.0'
license = 'MIT'
author_name = 'oslccm contributors'
author = author_name
