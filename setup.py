#!/usr/bin/env python

"""
 * Copyright(c) 2022 ZettaScale Technology and others
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the Eclipse Distribution License
 * v. 1.0 which is available at
 * http://www.eclipse.org/org/documents/edl-v10.php.
 *
 * SPDX-License-Identifier: EPL-2.0 OR BSD-3-Clause
"""

from pathlib import Path
from setuptools import setup, find_packages

this_directory = Path(__file__).resolve().parent


with open(this_directory / 'README.md', encoding='utf-8') as f:
    long_description = f.read()


setup(
    name='idlbind',
    version='0.1.0',
    description='Python bindings and binary codecs generated from IDL type trees',
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="EPL-2.0, BSD-3-Clause",
    platforms=["Windows", "Linux", "Mac OS-X", "Unix"],
    keywords=[
        "idl", "codegen", "codec", "serialization", "bindings", "dds"
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: Eclipse Public License 2.0 (EPL-2.0)",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Operating System :: OS Independent"
    ],
    packages=find_packages(".", include=("idlbind", "idlbind.*")),
    package_data={
        "idlbind": ["py.typed"],
    },
    entry_points={
        "console_scripts": [
            "idlbind=idlbind.tools.cli.main:cli",
        ],
    },
    python_requires='>=3.8',
    install_requires=[
        "typing-extensions>=3.7;python_version<'3.9'",
        "rich",
        "rich-click"
    ],
    extras_require={
        "dev": [
            "pytest>=6.2",
            "pytest-cov",
            "pytest-mock",
            "flake8",
            "flake8-bugbear",
            "twine"
        ]
    },
    zip_safe=False
)
