#!/usr/bin/env python3
"""Setup script for the EVControl model"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

setup(
    name="evcontrol",
    version="0.1.0",
    description="Explainable linear-weight model for EV torque, regenerative braking and traction control",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="EVControl Team",
    author_email="evcontrol@example.com",

    # Package configuration
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    py_modules=["evcontrol"],

    # Dependencies
    install_requires=[
        "numpy>=1.21.0",
        "rich>=13.0.0",
    ],

    # Optional dependencies
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
        ],
    },

    # CLI scripts
    entry_points={
        "console_scripts": [
            "evcontrol=evcontrol:main",
        ],
    },

    # Metadata
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],

    python_requires=">=3.8",

    # Include additional files
    include_package_data=True,
    zip_safe=False,
)
