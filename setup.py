#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup

readme = open('README.rst').read()
version = (0, 1, 0)

setup(
    name='mensura',
    python_requires=">=3.9",
    version=".".join(map(str, version)),
    description='Musical durations and tuplets: note values, dots and quarter-lengths',
    long_description=readme,
    packages=[
        'mensura',
    ],
    install_requires=[
        "quicktions",
        "configdict>=2.10.0",
    ],
    extras_require={
        'test': ['pytest'],
    },
    license="LGPLv2",
    zip_safe=False,
    classifiers=[
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Multimedia :: Sound/Audio'
    ],
)
