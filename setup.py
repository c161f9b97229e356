#!/usr/bin/env python3

"""Installer for ntcip module

"""

from setuptools import setup

setup (description = "NTCIP 1203 DMS message dialogs in Python",
       name = "ntcip-dms",
       version = "1.0",
       packages = [ "ntcip" ],
       py_modules = [ "crc" ],
       python_requires = ">=3.7",
       entry_points = {
           "console_scripts" : [ "ntcip-dms = ntcip.main:main" ]
           },
       extras_require = {
           "yaml" : "PyYAML",
           "test" : "pytest"
           },
       classifiers=[
           "Development Status :: 3 - Alpha",
           "Topic :: Communications",
           "Programming Language :: Python :: 3",
           "Programming Language :: Python :: 3.7",
           ],
       )
