#!/usr/bin/env python
"""
runoff: factor based claims reserving on run-off triangles.
"""
import pathlib
from setuptools import setup, find_packages

NAME = "runoff"
DESCRIPTION = "Factor Based Claims Reserving on Run-off Triangles"
LICENSE = "MIT"
BASE_DIR = pathlib.Path(__file__).parent.resolve()
LONG_DESCRIPTION = (BASE_DIR / "README.md").read_text(encoding="utf-8")
VERSION = (BASE_DIR / "VERSION").read_text(encoding="utf-8").strip()
REQUIREMENTS = (BASE_DIR / "requirements.txt").read_text(encoding="utf-8").split()



setup(
    name=NAME,
    version=VERSION,
    license=LICENSE,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["runoff", "runoff.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: MIT License",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Operating System :: OS Independent",
        ],
    keywords=[
        "actuarial reserving chainladder bornhuetter-ferguson cape-cod insurance",
        ],
    install_requires=REQUIREMENTS,
    extras_require={
        "plot": ["matplotlib", "seaborn"],
        "test": ["pytest"],
        },
    package_data={"runoff.datasets": ["*.csv"]},
    include_package_data=True,
    )
