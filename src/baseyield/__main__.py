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

import argparse
import json
import sys
from typing import Callable, Iterable

import dnaio

from ._version import __version__
from .histogram import Histogram
from .report_modules import (HistogramReport, LengthBinReport, NxReport,
                             QScoreReport, ReportModule,
                             report_modules_to_dict)
from .sampling import sample_records
from .stats import (EmptyInputError, LengthCollector, MaxLengthError,
                    QualityCounter, check_maximum_length)
from .util import NGSFile

DEFAULT_SKIP = 1
DEFAULT_MAXLEN = 50_000
DEFAULT_WINDOW = 500


def bounded_int(minimum: int, maximum: int) -> Callable[[str], int]:
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"invalid integer value: {value!r}")
        if not minimum <= number <= maximum:
            raise argparse.ArgumentTypeError(
                f"{number} is not in {minimum}..{maximum}")
        return number
    return parse


def argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report the base yield of sequencing reads over quality "
                    "scores or read length bins, or report Nx values.")
    parser.add_argument("input", metavar="INPUT",
                        help="Input FASTQ, FASTA or uBAM file. "
                             "The format is autodetected and compressed "
                             "formats are supported.")
    modes = parser.add_mutually_exclusive_group(required=True)
    modes.add_argument("-q", "--qscore", action="store_true",
                       help="Output base yield over qscores.")
    modes.add_argument("-l", "--len", action="store_true",
                       help="Output base yield over length bins.")
    modes.add_argument("-n", "--nx", action="store_true",
                       help="Output Nx values (from N10 to N100).")
    parser.add_argument("-x", "--hist", action="store_true",
                        help="Output a histogram instead of the table. Only "
                             "for --qscore and --len.")
    parser.add_argument("-s", "--skip", type=bounded_int(0, 1000),
                        default=DEFAULT_SKIP, metavar="N",
                        help=f"Only use every Nth read [0..1000] to speed up "
                             f"processing of large files. Not used for --nx. "
                             f"Default: {DEFAULT_SKIP}.")
    parser.add_argument("-m", "--maxlen", type=bounded_int(100, 500_000),
                        default=DEFAULT_MAXLEN, metavar="LENGTH",
                        help=f"Maximum length to use in --len output "
                             f"[100..500000]. Default: {DEFAULT_MAXLEN}.")
    parser.add_argument("-w", "--window", type=bounded_int(10, 1000),
                        default=DEFAULT_WINDOW, metavar="LENGTH",
                        help=f"Bin step in --len output [10..1000]. "
                             f"Default: {DEFAULT_WINDOW}.")
    parser.add_argument("--json",
                        help="Also write the report to this JSON file.")
    parser.add_argument("-t", "--threads", type=int, default=2,
                        help="Number of threads to use. If greater than one "
                             "an additional thread for gzip "
                             "decompression will be used. Default: 2.")
    parser.add_argument("--version", action="version",
                        version=__version__)
    return parser


def qscore_report(records: Iterable[dnaio.SequenceRecord],
                  hist: bool) -> ReportModule:
    histogram = Histogram() if hist else None
    counter = QualityCounter(histogram)
    for record in records:
        counter.add_read(len(record), record.qualities)
    if histogram is not None:
        return HistogramReport.from_histogram(
            "Histogram of qvalues for all bases", histogram)
    return QScoreReport.from_quality_counter(counter)


def length_report(records: Iterable[dnaio.SequenceRecord],
                  hist: bool,
                  window: int,
                  maxlen: int) -> ReportModule:
    collector = LengthCollector()
    for record in records:
        collector.add_read(len(record))
    check_maximum_length(collector.maximum_length(), window, maxlen)
    if hist:
        histogram = Histogram()
        for length in collector.lengths:
            histogram.add(length)
        return HistogramReport.from_histogram(
            "Histogram of read lengths", histogram)
    return LengthBinReport.from_lengths(
        collector.lengths, collector.total_bases, window, maxlen)


def nx_report(records: Iterable[dnaio.SequenceRecord]) -> ReportModule:
    collector = LengthCollector()
    for record in records:
        collector.add_read(len(record))
    return NxReport.from_lengths(collector.lengths)


def main() -> None:
    parser = argument_parser()
    args = parser.parse_args()
    if args.hist and args.nx:
        parser.error("argument -x/--hist: not allowed with argument -n/--nx")
    threads = args.threads
    if threads < 1:
        raise ValueError(f"Threads must be greater than 1, got {threads}.")

    try:
        with NGSFile(args.input, threads - 1) as reader:
            if args.qscore:
                report = qscore_report(
                    sample_records(reader, args.skip), args.hist)
            elif args.len:
                report = length_report(
                    sample_records(reader, args.skip), args.hist,
                    args.window, args.maxlen)
            else:
                report = nx_report(reader)
    except (EmptyInputError, MaxLengthError) as error:
        sys.exit(str(error))

    sys.stdout.write(report.to_text() + "\n")
    if args.json is not None:
        with open(args.json, "wt") as json_file:
            json.dump(report_modules_to_dict([report]), json_file, indent=0)


if __name__ == "__main__":  # pragma: no cover
    main()
