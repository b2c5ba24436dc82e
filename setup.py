"""
Setup configuration for accs package.
"""

from setuptools import setup, find_packages

setup(
    name="accs",
    version="0.1.0",
    description="Authenticity & Conversion Confidence Score engine for creator content",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "numpy>=1.24",
        "click>=8.1",
        "tqdm>=4.65",
        "logfire>=0.50",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "accs=accs.cli.main:cli",
        ],
    },
)
