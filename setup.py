"""
# Setup Script

Derived from the setuptools sample project at
https://github.com/pypa/sampleproject/blob/main/setup.py

"""

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
import pathlib

here = pathlib.Path(__file__).parent.resolve()

# Get the long description from the README file
long_description = (here / "readme.md").read_text(encoding="utf-8")

setup(
    name="sram_macro",
    version="0.1.0.dev0",
    description="Interface Binding for Pre-Generated SRAM Macros",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8, <4",
    install_requires=["vlsir>=4.0", "vlsirtools>=4.0", "pydantic>=2.0"],
    extras_require={
        "dev": ["pytest", "coverage", "pytest-cov", "black", "twine"]
    },
)
