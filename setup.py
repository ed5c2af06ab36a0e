"""
Setup script for the snake-draft-engine package.

Installs the ``draft_engine`` package from ``src/`` together with its
SQLite schema, and a ``draft-engine`` console script for the periodic
automation timer.
"""

from setuptools import setup, find_packages

setup(
    name="snake-draft-engine",
    version="1.0.0",
    description="Snake draft turn engine - turn order, pick deadlines, auto-picks and atomic pick submission",
    author="Draft Engine Maintainers",
    license="Proprietary",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
        "dev": [
            "pytest>=7.4",
            "build",
            "wheel",
        ],
    },
    package_data={
        "draft_engine._store": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "draft-engine=draft_engine.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
