#!/usr/bin/env python3
from setuptools import setup, find_packages

from bitunit.version import __version__

with open('README.md', 'r') as file:
    long_description = file.read()

setup(
    name='bitunit',
    version=__version__,
    description='Convert and format amounts of information (bits, bytes '
                'and their decimal and binary multiples)',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='MIT',
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'bitunit = bitunit.cli.cli:main',
        ]
    },
    packages=find_packages(),
    install_requires=[
        'regex>=2023.6.3'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    }
)
