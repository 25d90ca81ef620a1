"""Status reporting for Nagios-style monitoring checks."""

from codecs import open
from os import path

from setuptools import setup

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, "README.rst"), encoding="utf-8") as f:
    long_description = f.read()

test_deps = [
    "pytest>=3",
    "pytest-mock",
    "pytest-structlog",
    "pytest-cov",
]

setup(
    name="fc.checkstatus",
    version="1.0",
    description=__doc__,
    long_description=long_description,
    url="https://github.com/flyingcircusio/fc-nixos",
    author="Flying Circus Internet Operations GmbH",
    author_email="mail@flyingcircus.io",
    license="ZPL",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Environment :: Console",
        "License :: OSI Approved :: Zope Public License",
        "Programming Language :: Python :: 3.10",
        "Topic :: System :: Monitoring",
    ],
    packages=[
        "fc.checkstatus",
    ],
    install_requires=[
        "colorama",
        "structlog",
        "typer",
    ],
    zip_safe=False,
    tests_require=test_deps,
    extras_require={"test": test_deps},
    entry_points={
        "console_scripts": [
            "fc-check-status=fc.checkstatus.cli:app",
        ],
    },
)
