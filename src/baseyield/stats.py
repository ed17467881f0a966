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

import array
import bisect
import collections
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .histogram import Histogram

PHRED_OFFSET = 33
QUALITY_CODE_MIN = 33
QUALITY_CODE_MAX = 126
NUMBER_OF_QUALITY_CODES = QUALITY_CODE_MAX - QUALITY_CODE_MIN + 1
REPORTED_PHRED_MAX = 50
NX_THRESHOLDS = 10


class EmptyInputError(ValueError):
    """No records, or no bases, were left to compute statistics on."""


class MaxLengthError(ValueError):
    def __init__(self, maximum_length: int, window: int, maxlen: int):
        self.maximum_length = maximum_length
        self.window = window
        self.maxlen = maxlen
        self.minimum_maxlen = maximum_length + window
        super().__init__(
            f"Max read length is {maximum_length}, with --window {window} "
            f"please choose a --maxlen of at least {self.minimum_maxlen} "
            f"(got {maxlen}).")


class QualityCounter:
    """
    Count the bases for every quality character in the printable ASCII
    range. The table is a dense array indexed by ``code - QUALITY_CODE_MIN``.

    When a histogram is given, every base also adds its phred score
    (``code - PHRED_OFFSET``) as an observation.
    """
    counts: array.ArrayType
    total_bases: int
    number_of_reads: int
    histogram: Optional[Histogram]

    def __init__(self, histogram: Optional[Histogram] = None):
        # use bytes constructor to initialize to 0
        self.counts = array.array("Q", bytes(8 * NUMBER_OF_QUALITY_CODES))
        self.total_bases = 0
        self.number_of_reads = 0
        self.histogram = histogram

    def add_read(self, length: int, qualities: Optional[str]):
        if qualities is None:
            raise ValueError("Record has no quality scores. Quality "
                             "statistics require FASTQ or BAM input.")
        character_counts = collections.Counter(qualities)
        # Validate the whole read before the table is touched.
        for character in character_counts:
            code = ord(character)
            if not QUALITY_CODE_MIN <= code <= QUALITY_CODE_MAX:
                raise ValueError(
                    f"Invalid quality character {character!r} "
                    f"(code {code}), expected codes {QUALITY_CODE_MIN}-"
                    f"{QUALITY_CODE_MAX}.")
        self.number_of_reads += 1
        self.total_bases += length
        counts = self.counts
        histogram = self.histogram
        for character, count in character_counts.items():
            code = ord(character)
            counts[code - QUALITY_CODE_MIN] += count
            if histogram is not None:
                histogram.add(code - PHRED_OFFSET, count)

    def phred_counts(self) -> Iterator[Tuple[int, int]]:
        """Yield (phred, count) over the whole table in ascending order."""
        for index, count in enumerate(self.counts):
            yield index + QUALITY_CODE_MIN - PHRED_OFFSET, count


class LengthCollector:
    lengths: List[int]
    total_bases: int

    def __init__(self):
        self.lengths = []
        self.total_bases = 0

    def add_read(self, length: int):
        self.lengths.append(length)
        self.total_bases += length

    def maximum_length(self) -> int:
        if not self.lengths:
            raise EmptyInputError("No reads were sampled.")
        return max(self.lengths)


def check_maximum_length(maximum_length: int, window: int, maxlen: int):
    if maxlen < maximum_length + window:
        raise MaxLengthError(maximum_length, window, maxlen)


def length_bin_boundaries(window: int, maxlen: int) -> List[int]:
    return list(range(1, maxlen, window))


def bin_lengths(lengths: Iterable[int],
                boundaries: Sequence[int]) -> List[int]:
    """
    Sum the bases of each read into the bin with the smallest boundary that
    is at least the read length. Reads of length 1 or less are discarded.
    """
    bin_bases = [0] * len(boundaries)
    for length in lengths:
        if length <= 1:
            continue
        index = bisect.bisect_left(boundaries, length)
        if index == len(boundaries):
            raise ValueError(f"Read length {length} exceeds the last bin "
                             f"boundary {boundaries[-1]}.")
        bin_bases[index] += length
    return bin_bases


def bases_above(counts: Iterable[int], total: int) -> Iterator[int]:
    """
    For every count yield the bases left after subtracting it and all
    preceding counts from ``total``.
    """
    remaining = total
    for count in counts:
        remaining -= count
        yield remaining


def cumulative_sums(values: Iterable[int]) -> List[int]:
    sums = []
    running_sum = 0
    for value in values:
        running_sum += value
        sums.append(running_sum)
    return sums


def nx_read_lengths(lengths: Iterable[int]) -> List[Tuple[int, int]]:
    """
    Return (label, read length) for labels 100, 90, ..., 10.

    Lengths are ordered ascending and for threshold i the read length is
    taken where the cumulative base count first exceeds i/10 of all bases.
    The label is 100 - i * 10, so "N50" is the length at which the shorter
    reads hold half of the bases.
    """
    sorted_lengths = sorted(lengths)
    prefix_sums = cumulative_sums(sorted_lengths)
    total_bases = prefix_sums[-1] if prefix_sums else 0
    if total_bases == 0:
        raise EmptyInputError("No bases found. Nx values are undefined.")
    nx_values = []
    for i in range(NX_THRESHOLDS):
        target = total_bases * i // NX_THRESHOLDS
        index = bisect.bisect_right(prefix_sums, target)
        label = 100 - i * 100 // NX_THRESHOLDS
        nx_values.append((label, sorted_lengths[index]))
    return nx_values
