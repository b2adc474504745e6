#!/usr/bin/env python
# -*- coding: utf-8 -*-


from setuptools import setup

readme = open('README.rst').read()
version = (0, 1, 0)

setup(
    name='opennumeric',
    python_requires=">=3.9",
    version=".".join(map(str, version)),
    description='Numeric utilities: primes, precision helpers, running averages',
    long_description=readme,
    packages=[
        'opennumeric',
    ],
    include_package_data=True,
    install_requires=[
        "numpy",
        "appdirs",
        "tabulate",
    ],
    extras_require={
        'test': ["pytest"],
    },
    license="BSD",
    zip_safe=False,
    classifiers=[
        'License :: OSI Approved :: BSD License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3.9'
    ],
    package_data={'opennumeric': ['py.typed']},
)
