# -*- coding: utf-8; -*-

import io
import os

from setuptools import setup


metadata = {}
with io.open(os.path.join('rpslkit', '__metadata__.py'), 'rb') as f:
    exec(f.read(), metadata)            # pylint: disable=exec-used

with io.open('README.rst', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='RPSLkit',
    version=metadata['version'],
    description='Parser for RPSL objects in whois responses',
    long_description=long_description,
    license='MIT',

    python_requires='>=3.6',
    install_requires=[
        'bitstring >= 3.1.4, < 4',
        'dominate >= 2.2.0',
    ],
    extras_require={
        'test': [
            'pytest >= 3.0',
        ],
    },

    packages=[
        'rpslkit',
        'rpslkit.reports',
        'rpslkit.syntax',
        'rpslkit.util',
    ],
    package_data={
        'rpslkit.reports': ['html.css'],
    },
    entry_points={
        'console_scripts': [
            'rpslkit=rpslkit.cli:main',
        ],
    },
    classifiers=[
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Internet',
        'Topic :: System :: Networking',
    ],
    keywords='RPSL whois RIR IRR routing policy parser',
)
