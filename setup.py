#!/usr/bin/env python
from setuptools import setup
setup(
    name='syncanoobjects',
    version='0.1.0',
    description='model and queryset client for the Syncano REST API',
    author='Syncano',

    packages=['syncanoobjects'],
    python_requires='>=3.8',
    install_requires=['simplejson>=3.0.0', 'httplib2>=0.10.0'],
    extras_require={
        'test': ['mock>=4.0', 'pytest'],
    },
)
