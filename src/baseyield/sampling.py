# Copyright (C) 2023 Leiden University Medical Center
# This file is part of Baseyield
#
# Baseyield is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# Baseyield is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with Baseyield.  If not, see <https://www.gnu.org/licenses/

from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def is_sampled(index: int, skip: int) -> bool:
    """
    Stride sampling. Return whether the record at 1-based position ``index``
    is kept when one record out of every ``skip`` is sampled.

    Records ``skip``, ``2 * skip``, ... are kept, so the first ``skip - 1``
    records are always dropped. A skip of 0 samples nothing.
    """
    if skip == 0:
        return False
    return index % skip == 0


def sample_records(records: Iterable[T], skip: int) -> Iterator[T]:
    for index, record in enumerate(records, start=1):
        if is_sampled(index, skip):
            yield record
