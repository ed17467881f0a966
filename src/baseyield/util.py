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

import contextlib
import io
import os
from typing import BinaryIO, Callable, Iterator, Optional

import dnaio

import tqdm

import xopen


class ProgressUpdater:
    """
    A simple wrapper to update the progressbar based on the position in the
    raw input file.

    Because tqdm requires some minor execution time, only call tqdm.update()
    every ``update_every`` records to prevent too much time spent on
    calling the tell() functions and calling tqdm.update().
    """
    _get_position: Callable[[], int]
    previous_position: int
    processed_records: int
    update_every: int
    tqdm: tqdm.tqdm

    def __init__(self, filereader: io.BufferedReader,
                 update_every: int = 10_000):
        self.previous_position = 0
        self.processed_records = 0
        self.update_every = update_every
        filename = filereader.name
        if filereader.seekable():
            total: Optional[int] = os.stat(filename).st_size
            unit = "iB"
            self._get_position = filereader.tell
        else:
            total = None
            unit = "reads"
            self._get_position = lambda: self.processed_records
        self.tqdm = tqdm.tqdm(
            desc=f"Processing {os.path.basename(filename)}",
            unit=unit, unit_scale=True, unit_divisor=1024,
            total=total,
            smoothing=0.05,  # Much less erratic than default 0.3
        )

    def __enter__(self):
        return self

    def close(self):
        # Do one last update to ensure the entire progress bar is full
        self.tqdm.update(self._get_position() - self.previous_position)
        self.tqdm.close()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def update(self):
        self.processed_records += 1
        if self.processed_records % self.update_every == 0:
            current_position = self._get_position()
            self.tqdm.update(current_position - self.previous_position)
            self.previous_position = current_position


class NGSFile:
    """
    Sequencing reads from a FASTQ, FASTA or unaligned BAM file. Compressed
    files are decompressed transparently. Iterating yields
    ``dnaio.SequenceRecord`` objects.
    """
    filepath: str
    raw: io.BufferedReader
    file: BinaryIO
    progress: ProgressUpdater
    reader: "dnaio.SingleEndReader"

    def __init__(self, filepath: str, threads: int = 0):
        self.filepath = filepath
        with contextlib.ExitStack() as exit_stack:
            # Everything opened so far is closed again when detection fails.
            self.raw = exit_stack.enter_context(
                open(filepath, "rb"))  # type: ignore
            self.progress = exit_stack.enter_context(
                ProgressUpdater(self.raw))
            self.file = exit_stack.enter_context(
                xopen.xopen(self.raw, "rb", threads=threads))
            self.reader = dnaio.open(self.file)
            exit_stack.pop_all()

    def __iter__(self) -> Iterator[dnaio.SequenceRecord]:
        for record in self.reader:
            self.progress.update()
            yield record

    def close(self):
        self.progress.close()
        self.reader.close()
        self.file.close()
        self.raw.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
