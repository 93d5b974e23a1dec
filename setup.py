# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from setuptools import setup, find_packages

setup(
    name="axe",
    version="0.0.1",
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires=">=3.8",
    install_requires=[
        'numpy',
        'more-itertools',
        'typing-extensions',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
