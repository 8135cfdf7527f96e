import os
import re

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "gshhg", "_version.py")) as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

setup(
    name="gshhg",
    version=version,
    description="A decoder for the GSHHG binary shoreline format",
    license="BSD",
    packages=["gshhg"],
    package_data={"gshhg": ["py.typed"]},
    python_requires=">=3.9",
    install_requires=["msgspec>=0.18"],
    extras_require={
        "yaml": ["pyyaml"],
        "test": ["pytest", "pyyaml"],
    },
    entry_points={"console_scripts": ["gshhg-dump = gshhg.cli:main"]},
)
