# SPDX-FileCopyrightText: 2025 Espressif Systems (Shanghai) CO LTD
# SPDX-License-Identifier: Apache-2.0

import io
import os

import setuptools

AUTHOR = 'Node Module Manager developers'
MAINTAINER = 'Node Module Manager developers'
EMAIL = 'node-module-manager@users.noreply.github.com'

NAME = 'node-module-manager'
SHORT_DESCRIPTION = 'Dependency resolver and installer for npm style node_modules layouts'
LICENSE = 'Apache License 2.0'
URL = 'https://github.com/node-module-manager/node-module-manager'
REQUIRES = [
    'click',
    'colorama',
    'pydantic>=2',
    'pydantic-settings',
    'requests<3',
    'requests-file',
    'ruamel.yaml',
    'semantic_version>=2.10',
    'tqdm<5',
    'typing_extensions;python_version<"3.11"',
]
TEST_REQUIRES = [
    'pytest',
    'pytest-mock',
    'requests-mock',
]

info = {}  # type: ignore
path = os.path.abspath(os.path.dirname(__file__))

with io.open(os.path.join(path, 'README.md'), mode='r', encoding='utf-8') as readme:
    LONG_DESCRIPTION = readme.read()

with io.open(os.path.join(path, 'node_module_tools', '__version__.py'), mode='r', encoding='utf-8') as f:
    exec(f.read(), info)  # nosec

setuptools.setup(
    name=NAME,
    description=SHORT_DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    license=LICENSE,
    version=info['__version__'],
    author=AUTHOR,
    maintainer=MAINTAINER,
    author_email=EMAIL,
    url=URL,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    packages=setuptools.find_packages(
        include=('node_module_tools', 'node_module_tools.*', 'node_module_manager', 'node_module_manager.*')
    ),
    scripts=[],
    install_requires=REQUIRES,
    extras_require={
        'test': TEST_REQUIRES,
    },
    python_requires='>=3.8',
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'nmm = node_module_manager.cli:safe_cli',
        ],
    },
)
