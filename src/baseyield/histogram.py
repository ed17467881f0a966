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

import collections
import math
from typing import Counter, Iterator, List, NamedTuple, Sequence, Tuple

DEFAULT_NUMBER_OF_BUCKETS = 10
MAX_BAR_WIDTH = 50
BAR_CHARACTER = "∎"


class Bucket(NamedTuple):
    start: int
    end: int
    count: int


class Histogram:
    """
    Incremental histogram over non-negative integer observations.

    Only the value -> count mapping is stored, so memory use is bounded by
    the number of distinct values rather than the number of observations.
    The running sums make the mean and variance available without a second
    pass.

    The output follows the layout of the Rust ``histo`` crate but is not
    byte-identical to it. Buckets here are ``ceil((max - min + 1) / n)``
    wide so the maximum always lands in the last bucket, where ``histo``
    pads the range by ``range % n`` instead. Mean, standard deviation and
    variance are printed with Python float formatting, so a whole number
    prints as ``3.0`` rather than ``3``.
    """
    number_of_buckets: int
    values: Counter[int]
    number_of_samples: int
    total: int
    total_of_squares: int

    def __init__(self, number_of_buckets: int = DEFAULT_NUMBER_OF_BUCKETS):
        if number_of_buckets < 1:
            raise ValueError(f"number_of_buckets must be at least 1, "
                             f"got {number_of_buckets}.")
        self.number_of_buckets = number_of_buckets
        self.values = collections.Counter()
        self.number_of_samples = 0
        self.total = 0
        self.total_of_squares = 0

    def add(self, value: int, count: int = 1):
        self.values[value] += count
        self.number_of_samples += count
        self.total += value * count
        self.total_of_squares += value * value * count

    def minimum(self) -> int:
        return min(self.values)

    def maximum(self) -> int:
        return max(self.values)

    def mean(self) -> float:
        return self.total / self.number_of_samples

    def variance(self) -> float:
        # Population variance.
        mean = self.mean()
        mean_of_squares = self.total_of_squares / self.number_of_samples
        return max(mean_of_squares - mean * mean, 0.0)

    def standard_deviation(self) -> float:
        return math.sqrt(self.variance())

    def bucket_size(self) -> int:
        value_range = self.maximum() - self.minimum() + 1
        return max(1, math.ceil(value_range / self.number_of_buckets))

    def buckets(self) -> Iterator[Bucket]:
        if not self.values:
            return
        minimum = self.minimum()
        size = self.bucket_size()
        counts = [0] * self.number_of_buckets
        for value, count in self.values.items():
            counts[(value - minimum) // size] += count
        for i, count in enumerate(counts):
            start = minimum + i * size
            yield Bucket(start, start + size, count)


def render_histogram(number_of_samples: int,
                     minimum: int,
                     maximum: int,
                     mean: float,
                     standard_deviation: float,
                     variance: float,
                     buckets: Sequence[Tuple[int, int, int]]) -> str:
    lines: List[str] = [f"# Number of samples = {number_of_samples}"]
    if number_of_samples == 0:
        return "\n".join(lines)
    max_bucket_count = max(count for _, _, count in buckets)
    count_per_char = max(max_bucket_count // MAX_BAR_WIDTH, 1)
    lines.extend([
        f"# Min = {minimum}",
        f"# Max = {maximum}",
        "#",
        f"# Mean = {mean}",
        f"# Standard deviation = {standard_deviation}",
        f"# Variance = {variance}",
        "#",
        f"# Each {BAR_CHARACTER} is a count of {count_per_char}",
        "#",
    ])
    range_width = len(str(buckets[-1][1]))
    count_width = len(str(max_bucket_count))
    for start, end, count in buckets:
        bar = BAR_CHARACTER * (count // count_per_char)
        lines.append(
            f"{start:>{range_width}} .. {end:>{range_width}} "
            f"[ {count:>{count_width}} ]: {bar}")
    return "\n".join(lines)
