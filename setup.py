#!/usr/bin/env python

"""Setuptools setup file"""

from setuptools import setup, find_packages

# Metadata
PACKAGE_NAME = "FormalDispatch"
PACKAGE_VERSION = "0.1.0"

setup(
    name=PACKAGE_NAME,
    version=PACKAGE_VERSION,

    description="Formal classes with typed slots and multiple dispatch",
    license="PSF or ZPL",

    python_requires = '>=3.8',
    install_requires = ['zope.interface'],
    extras_require = {'test': ['pytest']},

    test_suite  = 'formalclasses.tests.test_suite',
    package_dir = {'':'src'},
    packages    = find_packages('src'),
)
