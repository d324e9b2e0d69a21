#!/usr/bin/env python3
"""esgateway package setup."""

from setuptools import setup, find_packages
from pathlib import Path

readme = Path(__file__).parent / "README.md"
long_description = readme.read_text(encoding="utf-8") if readme.exists() else ""

setup(
    name="esgateway",
    version="0.1.0",
    description="Minimal HTTP gateway for inserting and listing Elasticsearch documents",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Database",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    ],
    python_requires=">=3.9",
    install_requires=[
        "elasticsearch>=8.0.0,<9",
        "fastapi>=0.100",
        "pydantic>=2.0",
        "pydantic-settings>=2.2",
        "structlog>=23.1",
        "uvicorn>=0.23",
    ],
    extras_require={
        "dev": ["pytest", "pytest-cov", "httpx", "elastic-transport>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "esgateway=esgateway.cli:main",
        ],
    },
)
