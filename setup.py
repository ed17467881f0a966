# Copyright (C) 2023 Leiden University Medical Center
# This file is part of baseyield
#
# baseyield is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# baseyield is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with baseyield.  If not, see <https://www.gnu.org/licenses/

from setuptools import find_packages, setup


setup(
    name="baseyield",
    version="0.1.0",
    description="Base yield over quality scores and read lengths, and Nx "
                "values for sequencing data.",
    license="AGPL-3.0-or-later",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "dnaio>=1.0.0",
        "tqdm",
        "xopen>=1.8.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["baseyield = baseyield.__main__:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",  # noqa: E501
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
)
