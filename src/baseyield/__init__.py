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

from ._version import __version__
from .histogram import Histogram
from .report_modules import (HistogramReport, LengthBinReport, NxReport,
                             QScoreReport)
from .sampling import is_sampled, sample_records
from .stats import (EmptyInputError, LengthCollector, MaxLengthError,
                    QualityCounter)
from .stats import NUMBER_OF_QUALITY_CODES, PHRED_OFFSET


__all__ = [
    "EmptyInputError",
    "Histogram",
    "HistogramReport",
    "LengthBinReport",
    "LengthCollector",
    "MaxLengthError",
    "NxReport",
    "QScoreReport",
    "QualityCounter",
    "is_sampled",
    "sample_records",
    "NUMBER_OF_QUALITY_CODES",
    "PHRED_OFFSET",
    "__version__"
]
