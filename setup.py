"""
Setup script for ordinal-bloom.
"""

from setuptools import setup, find_packages

setup(
    name="ordinal-bloom",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    package_data={"ordinal_bloom": ["py.typed"]},
    python_requires=">=3.8",
    install_requires=["mmh3>=4.0"],
    extras_require={"test": ["pytest"]},
)
