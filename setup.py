#!/usr/bin/env python

import re

from setuptools import setup


version = ''
with open('s3sign/__init__.py', 'r') as fd:
    version = re.search(r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
                        fd.read(), re.MULTILINE).group(1)

if not version:
    raise RuntimeError('Cannot find version information')


with open('README.rst', 'rb') as f:
    readme = f.read().decode('utf-8')

setup(
    name='s3sign',
    version=version,
    description='AWS Signature Version 4 signer and browser upload policy generator for S3',
    long_description=readme,
    packages=['s3sign'],
    install_requires=['requests!=2.9.0'],
    extras_require={
        'test': ['mock']
    },
    include_package_data=True,
    python_requires='>=3.6',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ]
)
