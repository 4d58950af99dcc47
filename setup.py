"""
Setup script for mdexercises.

mdexercises parses interactive exercise markdown for online books.
It serves two roles:

1. Library - parse_exercise() turns ::: directive blocks into typed documents
2. Content Pipeline - CI validation of exercise files (check, lint)

The 'mdexercises' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="mdexercises",
    version="0.1.0",
    description="Interactive exercise parser for markdown books",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["mdexercises", "mdexercises.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Directive headers
        "PyYAML>=6.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mdexercises=mdexercises.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Text Processing :: Markup :: Markdown",
    ],
    keywords="markdown exercises education parser",
)
