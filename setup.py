#!/usr/bin/env python3
import os
from typing import List

from setuptools import find_packages, setup

DESCRIPTION = 'Resolution of contract library links for block explorer verification'
VERSION = '0.1.0'


def read_requirements(path: str) -> List[str]:
    assert os.path.isfile(path)
    with open(path) as requirements:
        return requirements.read().split()


requirements = read_requirements('requirements.txt')
dev_requirements = read_requirements('requirements-dev.txt')

config = {
    'version': VERSION,
    'scripts': [],
    'name': 'library-links',
    'description': DESCRIPTION,
    'license': 'MIT',
    'keywords': 'ethereum solidity library linking verification',
    'install_requires': requirements,
    'extras_require': {'test': dev_requirements},
    'packages': find_packages(exclude=['tests', 'tests.*']),
    'include_package_data': True,
    'python_requires': '>=3.7',
    'classifiers': [
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ],
    'entry_points': {
        'console_scripts': ['library-links = library_links.__main__:main'],
    },
    'zip_safe': False,
    'package_data': {"library_links": ["py.typed"]},
}

setup(**config)
