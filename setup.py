#!/usr/bin/env python
#
# Copyright 2026 Canonical Ltd.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""The setup script."""

from setuptools import find_packages, setup

VERSION = "0.3.0"

with open("README.md") as readme_file:
    readme = readme_file.read()


install_requires = [
    "PyYAML",
    "pydantic>=2.0.0,<3.0.0",
]

dev_requires = [
    "autoflake",
    "twine",
]

types_requires = [
    "mypy[reports]>=1.4.1,<2.0",
    "types-PyYAML",
    "types-setuptools",
]

test_requires = [
    "black",
    "codespell",
    "coverage",
    "pydocstyle",
    "pytest",
    "pytest-cov",
    "pytest-mock",
    "pytest-subprocess",
]

extras_requires = {
    "dev": dev_requires + test_requires + types_requires,
    "test": test_requires + types_requires,
    "types": types_requires,
}


setup(
    name="hacker-ostree",
    version=VERSION,
    description="APT package overlay for OSTree-based systems",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Canonical Ltd.",
    license="GNU Lesser General Public License v3",
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)",
        "Natural Language :: English",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    entry_points={
        "console_scripts": [
            "hacker-ostree=hacker_ostree.main:main",
        ],
    },
    install_requires=install_requires,
    extras_require=extras_requires,
    packages=find_packages(include=["hacker_ostree", "hacker_ostree.*"]),
    include_package_data=True,
    zip_safe=False,
)
