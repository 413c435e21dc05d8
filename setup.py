#!/usr/bin/env python
# -*- encoding: utf-8 -*-

"""Setup Module for recordkit"""

import io
from glob import glob
from os.path import basename, dirname, join, splitext

from setuptools import find_packages, setup


def read(*names, **kwargs):
    """Helper method to read files"""
    return io.open(
        join(dirname(__file__), *names),
        encoding=kwargs.get("encoding", "utf8"),
    ).read()


marshmallow_requires = ["marshmallow>=3.15.0"]

install_requires = marshmallow_requires + [
    "bleach>=4.1.0",
    "inflection>=0.5.1",
]

testing_requires = [
    "pytest-cov>=4.1.0",
    "pytest-mock==3.12.0",
    "pytest>=7.4.3",
]

dev_requires = testing_requires + [
    "black>=23.11.0",
    "coverage>=7.3.2",
    "isort>=5.12.0",
]

setup(
    name="recordkit",
    version="0.1.0",
    license="BSD 3-Clause License",
    description="Mutable record types with generated accessors, computed fields and composition",
    long_description=read("README.rst"),
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.11",
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords=["records", "accessors", "information hiding", "composition"],
    install_requires=install_requires,
    extras_require={
        "test": testing_requires,
        "tests": testing_requires,
        "testing": testing_requires,
        "dev": dev_requires,
        "all": dev_requires,
    },
)
