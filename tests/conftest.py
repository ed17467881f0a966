import gzip
import struct

import pytest

BAM_NUCLEOTIDES = "=ACMGRSVTWYHKDBN"
UNMAPPED_BIN = 4680
FLAG_UNMAPPED = 4


def bam_record(name: str, sequence: str, qualities: bytes) -> bytes:
    encoded_name = name.encode("ascii") + b"\x00"
    codes = [BAM_NUCLEOTIDES.index(base) for base in sequence]
    if len(codes) % 2:
        codes.append(0)
    packed_sequence = bytes(
        (codes[i] << 4) | codes[i + 1] for i in range(0, len(codes), 2))
    body = struct.pack(
        "<iiBBHHHiiii",
        -1,  # refID
        -1,  # pos
        len(encoded_name),
        255,  # mapq
        UNMAPPED_BIN,
        0,  # n_cigar_op
        FLAG_UNMAPPED,
        len(sequence),
        -1,  # next refID
        -1,  # next pos
        0,  # tlen
    ) + encoded_name + packed_sequence + qualities
    return struct.pack("<i", len(body)) + body


@pytest.fixture
def ubam_file(tmp_path):
    """Two unaligned reads: ACGT with phred 0 and ACG with phred 40."""
    header = b"@HD\tVN:1.6\tSO:unknown\n"
    data = (b"BAM\1" + struct.pack("<i", len(header)) + header +
            struct.pack("<i", 0) +
            bam_record("read1", "ACGT", bytes([0] * 4)) +
            bam_record("read2", "ACG", bytes([40] * 3)))
    path = tmp_path / "reads.bam"
    path.write_bytes(gzip.compress(data))
    return path
