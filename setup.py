#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# XXX: importing yamf here would need its dependencies installed before they're declared
with open(Path(__file__).parent / 'yamf' / 'version.py') as fp:
    version = re.search(r"^BASE_VERSION = '([^']+)'", fp.read(), re.MULTILINE).group(1)  # type: ignore[union-attr]

setup(
    name='yamf',
    version=version,
    description='Canonical VarU64 and type-length-value encoding with a hash registry',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(include=('yamf', 'yamf.*')),
    package_data={'yamf.conf': ['*.yml']},
    install_requires=[
        'typing_extensions>=4.12',
        'structlog>=22.0',
        'pydantic>=2.0,<3',
        'pyyaml>=6.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
        'fuzz': ['atheris'],
    },
)
