# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import gzip
import io
import os.path
import warnings
import numpy as np
import pytest
import fastaio
from .util import data_dir, reference_entries


class FailingStream(io.StringIO):
    """
    A text stream that raises the given error when it is written to
    after :meth:`break_down()` was called.
    """

    def __init__(self, error):
        super().__init__()
        self._error = error
        self._broken = False

    def break_down(self):
        self._broken = True

    def write(self, text):
        if self._broken:
            raise self._error
        return super().write(text)


def write_chars(chars, file=None):
    if file is None:
        file = io.StringIO()
    writer = fastaio.FastaWriter(file)
    for char in chars:
        writer.write_char(char)
    writer.close()
    return file.getvalue()


def test_write_chars():
    assert write_chars(">seq1\nAC\nGT\n>seq2\nTT") == ">seq1\nACGT\n>seq2\nTT\n"


def test_stray_marker():
    writer = fastaio.FastaWriter(io.StringIO())
    for char in [">", "G", "1", "\n", "A", "C"]:
        writer.write_char(char)
    with pytest.raises(fastaio.StrayMarkerError):
        writer.write_char(">")


@pytest.mark.parametrize("write_method", ["char", "entry"])
def test_sequence_wrapping(write_method):
    file = io.StringIO()
    with fastaio.FastaWriter(file) as writer:
        if write_method == "char":
            for char in ">seq\n" + "A" * 85:
                writer.write_char(char)
        else:
            writer.write_entry("seq", "A" * 85)
    assert file.getvalue().split("\n") == [">seq", "A" * 80, "A" * 5, ""]


def test_custom_line_width():
    file = io.StringIO()
    with fastaio.FastaWriter(file, chars_per_line=4) as writer:
        writer.write([">seq", "ACG TAC", "GTA"])
    assert file.getvalue() == ">seq\nACGT\nACGT\nA\n"


def test_whitespace_handling():
    # Leading whitespace at the start of the file and of a description
    # is removed, whitespace in sequence data is removed,
    # but whitespace after the start of a description is kept
    output = write_chars(" \n\t>  seq 1 \nA C\tG\n\nT\n")
    assert output == ">seq 1 \nACGT\n"


def test_write_bytes():
    file = io.BytesIO()
    with fastaio.FastaWriter(file) as writer:
        writer.write(b">seq")
        writer.write(b"ACGT")
        writer.write_char(ord("A"))
    assert file.getvalue() == b">seq\nACGTA\n"


def test_write_nested():
    file = io.StringIO()
    with fastaio.FastaWriter(file) as writer:
        writer.write([">seq1", ["AC", ("GT",)], ">seq2", [ord("T"), ord("T")]])
    assert file.getvalue() == ">seq1\nACGT\n>seq2\nTT\n"


def test_write_invalid_type():
    writer = fastaio.FastaWriter(io.StringIO())
    with pytest.raises(TypeError):
        writer.write(1.0)
    with pytest.raises(TypeError):
        writer.write_char("AC")


@pytest.mark.parametrize(
    "chars, error",
    [
        ("A", fastaio.MissingDescriptionMarkerError),
        (" \nA", fastaio.MissingDescriptionMarkerError),
        (">\n", fastaio.EmptyDescriptionError),
        (">  \n", fastaio.EmptyDescriptionError),
        (">seq1\n>seq2\n", fastaio.SingleLineDescriptionError),
        (">seq1\nAC>", fastaio.StrayMarkerError),
        (">séq", fastaio.NonAsciiCharacterError),
        ([ord(">"), 200], fastaio.NonAsciiCharacterError),
    ],
)
def test_invalid_chars(chars, error):
    writer = fastaio.FastaWriter(io.StringIO())
    with pytest.raises(error):
        for char in chars:
            writer.write_char(char)


def test_long_description():
    description = "D" * 85
    file = io.StringIO()
    with fastaio.FastaWriter(file) as writer:
        with pytest.warns(fastaio.DescriptionTooLongWarning):
            writer.write(">" + description)
        writer.write("ACGT")
    # The description is written nevertheless
    assert file.getvalue() == f">{description}\nACGT\n"


def test_description_at_line_width():
    # '>' and 79 characters fit into a line
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        write_chars(">" + "D" * 79 + "\nACGT")
    with pytest.warns(fastaio.DescriptionTooLongWarning):
        write_chars(">" + "D" * 80 + "\nACGT")


def test_write_entries():
    file = io.StringIO()
    with fastaio.FastaWriter(file) as writer:
        assert writer.entry == 1
        writer.write_entry("  seq1 ", "ACGT\nAC")
        assert writer.entry == 1
        writer.write_entry("seq2", [ord("T"), "T", "T", "T"])
        assert writer.entry == 2
        writer.write_entry(b"seq3", np.frombuffer(b"GG", dtype=np.uint8))
        assert writer.entry == 3
    assert file.getvalue() == ">seq1\nACGTAC\n>seq2\nTTTT\n>seq3\nGG\n"


def test_mixed_writing():
    file = io.StringIO()
    with fastaio.FastaWriter(file) as writer:
        writer.write([">seq1", "AC"])
        writer.write_entry("seq2", "A" * 78)
        # Continue the sequence of the last entry
        writer.write("CCC")
        writer.write(">seq3")
        writer.write_char("G")
    assert file.getvalue().split("\n") == [
        ">seq1", "AC", ">seq2", "A" * 78 + "CC", "C", ">seq3", "G", ""
    ]


@pytest.mark.parametrize(
    "description, sequence, error",
    [
        ("X\nY", "ACGT", fastaio.EmbeddedNewlineError),
        ("séq", "ACGT", fastaio.NonAsciiDescriptionError),
        ("   ", "ACGT", fastaio.EmptyDescriptionError),
        ("seq", "", fastaio.EmptySequenceError),
        ("seq", " \n ", fastaio.EmptySequenceError),
        ("seq", "AC>GT", fastaio.StrayMarkerError),
        ("seq", "ACGTé", fastaio.NonAsciiCharacterError),
        ("seq", [65, 300], fastaio.NonAsciiCharacterError),
    ],
)
def test_invalid_entry(description, sequence, error):
    file = io.StringIO()
    writer = fastaio.FastaWriter(file)
    writer.write_entry("valid", "ACGT")
    output = file.getvalue()
    with pytest.raises(error):
        writer.write_entry(description, sequence)
    # Nothing of the invalid entry is written
    assert file.getvalue() == output


@pytest.mark.parametrize("prefix", [">seq1", ">seq1\n"])
def test_entry_after_open_description(prefix):
    file = io.StringIO()
    writer = fastaio.FastaWriter(file)
    for char in prefix:
        writer.write_char(char)
    output = file.getvalue()
    with pytest.raises(fastaio.SingleLineDescriptionError):
        writer.write_entry("seq2", "ACGT")
    assert file.getvalue() == output


def test_entry_description_whitespace():
    file = io.StringIO()
    with fastaio.FastaWriter(file) as writer:
        writer.write_entry("\x0b seq\x1c\t", "ACGT")
    assert file.getvalue() == ">seq\x1c\nACGT\n"


def test_close_without_writing():
    file = io.StringIO()
    writer = fastaio.FastaWriter(file)
    writer.close()
    assert file.getvalue() == ""
    assert writer.closed
    assert not file.closed
    # Closing twice is fine
    writer.close()
    with pytest.raises(ValueError):
        writer.write_char(">")


def test_close_broken_pipe():
    stream = FailingStream(BrokenPipeError())
    writer = fastaio.FastaWriter(stream)
    writer.write(">seq")
    writer.write_char("A")
    stream.break_down()
    writer.close()
    assert writer.closed


def test_close_failure():
    stream = FailingStream(OSError("No space left on device"))
    writer = fastaio.FastaWriter(stream)
    writer.write(">seq")
    writer.write_char("A")
    stream.break_down()
    with pytest.raises(OSError):
        writer.close()


def test_close_owned_file(tmp_path):
    path = tmp_path / "test.fasta"
    writer = fastaio.FastaWriter(path)
    writer.write_entry("seq", "ACGT")
    stream = writer._stream
    writer.close()
    assert stream.closed
    assert path.read_bytes() == b">seq\nACGT\n"


def test_stdout(capsys):
    with fastaio.FastaWriter() as writer:
        writer.write_entry("seq", "ACGT")
    assert capsys.readouterr().out == ">seq\nACGT\n"


def test_append(tmp_path):
    path = tmp_path / "test.fasta"
    with fastaio.FastaWriter(path) as writer:
        writer.write_entry("seq1", "ACGT")
    with fastaio.FastaWriter(path, mode="a") as writer:
        writer.write_entry("seq2", "TT")
    assert fastaio.read_fasta(path) == [("seq1", "ACGT"), ("seq2", "TT")]


def test_invalid_mode(tmp_path):
    with pytest.raises(ValueError):
        fastaio.FastaWriter(tmp_path / "test.fasta", mode="r")
    with pytest.raises(ValueError):
        fastaio.FastaWriter(io.StringIO(), mode="x")


def test_char_by_char_copy(tmp_path):
    """
    Write a file character by character into a compressed file and
    check that the entries are unchanged.
    """
    in_path = os.path.join(data_dir(), "alignment.fasta.gz")
    out_path = tmp_path / "test.fasta.gz"
    with fastaio.FastaWriter(out_path) as writer:
        with gzip.open(in_path, "rb") as in_file:
            for byte in in_file.read():
                writer.write_char(byte)
    ref_entries = reference_entries(os.path.join(data_dir(), "alignment.fasta"))
    assert fastaio.read_fasta(out_path) == ref_entries


def test_fragments():
    """
    Write each sequence as randomly sized fragments, one fragment per
    line.
    """
    ref_entries = reference_entries(os.path.join(data_dir(), "alignment.fasta"))
    np.random.seed(0)
    lines = []
    for description, sequence in ref_entries:
        lines.append(">" + description)
        i = 0
        while i < len(sequence):
            j = np.random.randint(i + 1, len(sequence) + 1)
            lines.append(sequence[i:j])
            i = j
    file = io.BytesIO()
    with fastaio.FastaWriter(file) as writer:
        writer.write(lines)
    for line in file.getvalue().splitlines():
        assert len(line) <= fastaio.LINE_WIDTH
    file.seek(0)
    assert fastaio.read_fasta(file) == ref_entries


def test_repr():
    writer = fastaio.FastaWriter(io.StringIO())
    writer.write_entry("seq1", "ACGT")
    writer.write_entry("seq2", "ACGT")
    assert repr(writer).endswith("entry=2)")