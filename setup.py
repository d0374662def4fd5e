#!/usr/bin/env python3
"""
Auto Driver Installer - Automatic graphics driver installer for Fedora
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="auto-driver-installer",
    version="0.1.0",
    description="Detects graphics hardware, installs display drivers and rolls back on failure",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPL-3.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "psutil>=5.9.0",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "auto-driver-installer=autodriver.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Hardware :: Hardware Drivers",
        "Topic :: System :: Installation/Setup",
    ],
    keywords="gpu drivers nvidia amd intel fedora dnf rpmfusion xorg",
)
