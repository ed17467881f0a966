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

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .histogram import Histogram, render_histogram
from .stats import (EmptyInputError, QualityCounter, REPORTED_PHRED_MAX,
                    bases_above, bin_lengths, length_bin_boundaries,
                    nx_read_lengths)


def percentage(part: int, total: int) -> str:
    return f"{part / total * 100:.4f}"


def tabulate(rows: Iterable[Sequence[Any]]) -> List[str]:
    return ["\t".join(str(field) for field in row) for row in rows]


@dataclasses.dataclass
class ReportModule(ABC):
    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @abstractmethod
    def to_text(self) -> str:
        pass


@dataclasses.dataclass
class QScoreReport(ReportModule):
    total_bases: int
    # phred, bases at phred, bases above phred
    rows: List[Tuple[int, int, int]]

    def to_text(self) -> str:
        lines = ["qvalue\tbases_at_q\tbases_above_q\tpercent_at_q\t"
                 "percent_above_q"]
        lines.extend(tabulate(
            (phred, count, above, percentage(count, self.total_bases),
             percentage(above, self.total_bases))
            for phred, count, above in self.rows
        ))
        return "\n".join(lines)

    @classmethod
    def from_quality_counter(cls, counter: QualityCounter):
        if counter.number_of_reads == 0:
            raise EmptyInputError("No reads were sampled.")
        total_bases = counter.total_bases
        if total_bases == 0:
            raise EmptyInputError("No bases were sampled. Quality score "
                                  "distribution is undefined.")
        # The cascade runs over the whole table so qualities above the
        # reported range still count as bases above.
        phred_counts = list(counter.phred_counts())
        remaining = bases_above((count for _, count in phred_counts),
                                total_bases)
        rows = [
            (phred, count, above)
            for (phred, count), above in zip(phred_counts, remaining)
            if phred <= REPORTED_PHRED_MAX
        ]
        return cls(total_bases, rows)


@dataclasses.dataclass
class LengthBinReport(ReportModule):
    maxbin: int
    total_bases: int
    maxbin_bases: int
    # bin boundary, bases in bin, bases above bin
    rows: List[Tuple[int, int, int]]

    def to_text(self) -> str:
        lines = [
            f"# maxbin:\t{self.maxbin}",
            f"# total_bases:\t{self.total_bases}",
            f"# maxbin_bases:\t{self.maxbin_bases}",
            "lenbin\tbases\tbases_above_len\tpercent_at_lenbin\t"
            "percent_above_lenbin",
        ]
        lines.extend(tabulate(
            (boundary, bases, above, percentage(bases, self.total_bases),
             percentage(above, self.total_bases))
            for boundary, bases, above in self.rows
        ))
        return "\n".join(lines)

    @classmethod
    def from_lengths(cls,
                     lengths: Sequence[int],
                     total_bases: int,
                     window: int,
                     maxlen: int):
        if total_bases == 0:
            raise EmptyInputError("No bases were sampled. Length "
                                  "distribution is undefined.")
        boundaries = length_bin_boundaries(window, maxlen)
        bin_bases = bin_lengths(lengths, boundaries)
        # First bin wins ties.
        maxbin_index = max(range(len(bin_bases)), key=bin_bases.__getitem__)
        rows = list(zip(boundaries, bin_bases,
                        bases_above(bin_bases, total_bases)))
        return cls(boundaries[maxbin_index], total_bases,
                   bin_bases[maxbin_index], rows)


@dataclasses.dataclass
class NxReport(ReportModule):
    # label, read length
    rows: List[Tuple[int, int]]

    def to_text(self) -> str:
        return "\n".join(["Nx\tread_len"] + tabulate(self.rows))

    @classmethod
    def from_lengths(cls, lengths: Iterable[int]):
        return cls(nx_read_lengths(lengths))


@dataclasses.dataclass
class HistogramReport(ReportModule):
    title: str
    number_of_samples: int
    minimum: int
    maximum: int
    mean: float
    standard_deviation: float
    variance: float
    buckets: List[Tuple[int, int, int]]

    def to_text(self) -> str:
        rendered = render_histogram(
            self.number_of_samples, self.minimum, self.maximum, self.mean,
            self.standard_deviation, self.variance, self.buckets)
        return f"# {self.title}\n{rendered}"

    @classmethod
    def from_histogram(cls, title: str, histogram: Histogram):
        if histogram.number_of_samples == 0:
            raise EmptyInputError(f"No observations for: {title}.")
        return cls(
            title=title,
            number_of_samples=histogram.number_of_samples,
            minimum=histogram.minimum(),
            maximum=histogram.maximum(),
            mean=histogram.mean(),
            standard_deviation=histogram.standard_deviation(),
            variance=histogram.variance(),
            buckets=[tuple(bucket) for bucket in histogram.buckets()],
        )


NAME_TO_CLASS = {
    "quality_scores": QScoreReport,
    "length_bins": LengthBinReport,
    "nx": NxReport,
    "histogram": HistogramReport,
}
CLASS_TO_NAME: Dict[type, str] = {
    value: key for key, value in NAME_TO_CLASS.items()}


def report_modules_to_dict(report_modules: Iterable[ReportModule]):
    return {
        CLASS_TO_NAME[type(module)]: module.to_dict()
        for module in report_modules
    }
