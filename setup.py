##
## © Copyright 2021- IBM Inc. All rights reserved
# SPDX-License-Identifier: MIT
##


import pathlib
from setuptools import setup

# The directory containing this file
HERE = pathlib.Path(__file__).parent

# The text of the README file
README = (HERE / "README.md").read_text()

# This call to setup() does all the work
setup(
    name="oslccm",
    version="0.1.0",
    description="Python client which discovers the change requests of an OSLC Change Management server through its catalog, service providers and services",
    long_description=README,
    long_description_content_type="text/markdown",
    author="oslccm contributors",
    license="MIT",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    packages=["oslccm", "oslccm.examples","oslccm.tests"],
    include_package_data=True,
    install_requires=['anytree',"cryptography",'lxml',"python-dateutil", "pytz", "rdflib", "requests",'tqdm','urllib3'],
    extras_require={
        "test": ["pytest"],
        "dev": ["bump2version", "twine"],
    },
    entry_points={
        "console_scripts": [
            "cmdiscover=oslccm.examples.cmdiscover:main",
        ]
    },
)
