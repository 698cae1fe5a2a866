#!/usr/bin/env python
"""ucb: command-line front end for Unity Cloud Build."""

from setuptools import find_packages, setup

VERSION = "0.3.0"
CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "License :: OSI Approved :: MIT License",
]

DEPENDENCIES = [
    "knack>=0.11.0",
    "pyyaml>=6.0",
    "requests>=2.28.0",
    "rich>=13.0.0",
    # prompt_toolkit for masked input, inline validation and select lists
    "prompt_toolkit>=3.0.0",
]

setup(
    name="ucb-cli",
    version=VERSION,
    description="Command-line front end for managing Unity Cloud Build credentials and projects",
    long_description="Collects command input from flags, config defaults and interactive prompts.",
    license="MIT",
    author="",
    author_email="",
    classifiers=CLASSIFIERS,
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=DEPENDENCIES,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "ucb=ucb.__main__:main",
        ]
    },
)
