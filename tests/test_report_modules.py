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

import pytest

from baseyield import (EmptyInputError, Histogram, HistogramReport,
                       LengthBinReport, NxReport, QScoreReport,
                       QualityCounter)
from baseyield.report_modules import report_modules_to_dict


def test_qscore_report_all_zero_quality():
    counter = QualityCounter()
    counter.add_read(2, "!!")
    counter.add_read(2, "!!")
    report = QScoreReport.from_quality_counter(counter)
    assert report.total_bases == 4
    assert len(report.rows) == 51
    assert report.rows[0] == (0, 4, 0)
    lines = report.to_text().splitlines()
    assert lines[0] == ("qvalue\tbases_at_q\tbases_above_q\tpercent_at_q\t"
                        "percent_above_q")
    assert lines[1] == "0\t4\t0\t100.0000\t0.0000"
    assert lines[-1] == "50\t0\t0\t0.0000\t0.0000"


def test_qscore_report_counts_bases_above_printed_range():
    counter = QualityCounter()
    counter.add_read(7, "HHHHHHH")
    counter.add_read(7, "KKKKKKK")
    counter.add_read(8, "XKLLCCCC")
    report = QScoreReport.from_quality_counter(counter)
    rows = {phred: (count, above) for phred, count, above in report.rows}
    assert rows[33] == (0, 22)
    assert rows[34] == (4, 18)
    assert rows[39] == (7, 11)
    assert rows[42] == (8, 3)
    assert rows[43] == (2, 1)
    # The base with phred 55 is never printed but stays "above".
    assert rows[50] == (0, 1)
    assert 55 not in rows
    lines = report.to_text().splitlines()
    assert lines[35] == "34\t4\t18\t18.1818\t81.8182"
    assert lines[-1] == "50\t0\t1\t0.0000\t4.5455"
    percent_at = sum(float(line.split("\t")[3]) for line in lines[1:])
    assert percent_at == pytest.approx(100 - 100 / 22, abs=0.001)


def test_qscore_report_no_reads():
    with pytest.raises(EmptyInputError) as error:
        QScoreReport.from_quality_counter(QualityCounter())
    error.match("No reads were sampled")


def test_qscore_report_no_bases():
    counter = QualityCounter()
    counter.add_read(0, "")
    with pytest.raises(EmptyInputError):
        QScoreReport.from_quality_counter(counter)


def test_length_bin_report():
    report = LengthBinReport.from_lengths([5, 15, 25], 45, 10, 100)
    assert report.maxbin == 31
    assert report.maxbin_bases == 25
    assert report.total_bases == 45
    boundaries = [boundary for boundary, _, _ in report.rows]
    assert boundaries == list(range(1, 100, 10))
    lines = report.to_text().splitlines()
    assert lines[:4] == [
        "# maxbin:\t31",
        "# total_bases:\t45",
        "# maxbin_bases:\t25",
        "lenbin\tbases\tbases_above_len\tpercent_at_lenbin\t"
        "percent_above_lenbin",
    ]
    assert lines[4] == "1\t0\t45\t0.0000\t100.0000"
    assert lines[5] == "11\t5\t40\t11.1111\t88.8889"
    assert lines[6] == "21\t15\t25\t33.3333\t55.5556"
    assert lines[7] == "31\t25\t0\t55.5556\t0.0000"
    assert lines[-1] == "91\t0\t0\t0.0000\t0.0000"


def test_length_bin_report_tie_takes_first_bin():
    report = LengthBinReport.from_lengths([5, 7, 12], 24, 10, 100)
    assert report.maxbin == 11
    assert report.maxbin_bases == 12


def test_length_bin_report_conservation():
    lengths = [1, 0, 40, 41, 9, 200, 1]
    total = sum(lengths)
    report = LengthBinReport.from_lengths(lengths, total, 50, 1000)
    binned = sum(bases for _, bases, _ in report.rows)
    assert binned == total - 2
    # Short reads never reach a bin, so they remain "above" at the end.
    assert report.rows[-1][2] == 2


def test_length_bin_report_no_bases():
    with pytest.raises(EmptyInputError):
        LengthBinReport.from_lengths([0, 0], 0, 10, 100)


def test_nx_report():
    report = NxReport.from_lengths([10, 20, 30, 40])
    lines = report.to_text().splitlines()
    assert lines[0] == "Nx\tread_len"
    assert lines[1] == "100\t10"
    assert lines[6] == "50\t30"
    assert lines[10] == "10\t40"
    assert len(lines) == 11


def test_histogram_report():
    histogram = Histogram()
    for value in (1, 2, 3, 4):
        histogram.add(value)
    report = HistogramReport.from_histogram("Histogram of read lengths",
                                            histogram)
    text = report.to_text()
    assert text.startswith("# Histogram of read lengths\n"
                           "# Number of samples = 4\n")
    lines = text.splitlines()
    assert lines[2] == "# Min = 1"
    assert lines[3] == "# Max = 4"
    assert lines[5] == "# Mean = 2.5"
    assert lines[11] == " 1 ..  2 [ 1 ]: ∎"
    assert len(lines) == 21


def test_histogram_report_empty():
    with pytest.raises(EmptyInputError):
        HistogramReport.from_histogram("Histogram of read lengths",
                                       Histogram())


def test_report_modules_to_dict():
    report = NxReport.from_lengths([10, 20, 30, 40])
    d = report_modules_to_dict([report])
    assert list(d.keys()) == ["nx"]
    assert d["nx"]["rows"][5] == (50, 30)
