# setup.py - Install the planar_idempotents package
from setuptools import setup, find_packages

setup(
    name="planar_idempotents",
    version="0.1.0",
    description="Count idempotents of the Jones, Motzkin and Kauffman planar diagram monoids",
    packages=find_packages(include=["planar_idempotents", "planar_idempotents.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "planar-idempotents=planar_idempotents.cli:main",
        ],
    },
)
