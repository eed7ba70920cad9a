"""
Fluxor setup.py — install the package and the ``fluxor`` command.

Usage:
    pip install .                          # install everything
    pip install ".[dev]"                   # install with test and lint tools
"""

from pathlib import Path

from setuptools import find_packages, setup

HERE = Path(__file__).resolve().parent
long_description = ""
if (HERE / "README.md").exists():
    long_description = (HERE / "README.md").read_text(encoding="utf-8")

setup(
    name="fluxor",
    version="0.1.0",
    description="Exchange or burn small crypto balances through the Mixin network",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    author="Fluxor Contributors",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*", "scripts", "build"]),
    py_modules=["run_fluxor"],
    install_requires=[
        "tomli>=2.0.0,<3;python_version<'3.11'",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "mypy>=1.5",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fluxor=run_fluxor:main_sync",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Office/Business :: Financial",
        "Topic :: Software Development :: Libraries",
    ],
)
