# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains convenience functions for reading and writing
complete FASTA files without the need to manually handle a
:class:`FastaReader` or :class:`FastaWriter`.
"""

__name__ = "fastaio"
__all__ = ["read_fasta", "write_fasta"]

import warnings
from .error import DescriptionTooLongWarning, EmptySequenceError
from .file import is_open_compatible, is_text, open_file
from .reader import FastaReader
from .writer import LINE_WIDTH, check_description, format_sequence


def read_fasta(file, out_type=str, compressed=None):
    """
    Read all entries of a FASTA file.

    Parameters
    ----------
    file : file-like object or str
        The file to be read.
        Alternatively a file path can be supplied.
    out_type : type or callable, optional
        The representation of the returned sequences.
        See :class:`FastaReader`.
    compressed : bool, optional
        Whether the file is gzip compressed.
        By default, a file path ending with ``.gz`` is considered to be
        compressed.

    Returns
    -------
    entries : list of tuple(str, object)
        The description and sequence of each entry.

    Examples
    --------

    >>> import io
    >>> file = io.BytesIO(b">G1\\nACGT\\nAC\\n>G2\\nTTTT\\n")
    >>> print(read_fasta(file))
    [('G1', 'ACGTAC'), ('G2', 'TTTT')]
    """
    with FastaReader(file, out_type, compressed=compressed) as reader:
        return reader.read_all()


def write_fasta(file, items, mode="w", chars_per_line=LINE_WIDTH, compressed=None):
    """
    Write the given entries into a FASTA file.

    The entries are written one after another, so `items` may be a
    generator.
    Each entry is validated before it is written, so a faulty entry
    does not produce partial output.

    Parameters
    ----------
    file : file-like object or str
        The file to be written to.
        Alternatively a file path can be supplied.
    items : iterable of tuple(str, object)
        The description and sequence of each entry.
    mode : {'w', 'a'}, optional
        Whether an existing file is overwritten or appended to.
        Only relevant, if a file path is supplied.
    chars_per_line : int, optional
        The number of characters in a line containing sequence data
        after which a line break is inserted.
    compressed : bool, optional
        Whether the file is gzip compressed.
        By default, a file path ending with ``.gz`` is considered to be
        compressed.

    Warns
    -----
    DescriptionTooLongWarning
        If a description line exceeds `chars_per_line`.

    Examples
    --------

    >>> import io
    >>> file = io.StringIO()
    >>> write_fasta(file, [("G1", "ACGTAC"), ("G2", "TT TT")], chars_per_line=4)
    >>> print(file.getvalue(), end="")
    >G1
    ACGT
    AC
    >G2
    TTTT
    """
    if mode not in ("w", "a"):
        raise ValueError(f"Invalid file mode '{mode}'")
    if is_open_compatible(file):
        with open_file(file, mode, compressed) as stream:
            _write_entries(stream, items, chars_per_line)
    else:
        _write_entries(file, items, chars_per_line)


def _write_entries(stream, items, chars_per_line):
    binary = not is_text(stream)
    for entry, (description, sequence) in enumerate(items, start=1):
        description = check_description(description, entry)
        if len(description) >= chars_per_line:
            warnings.warn(
                f"Description line longer than {chars_per_line} characters "
                f"(entry {entry} of FASTA input)",
                DescriptionTooLongWarning,
            )
        lines, entry_chars = format_sequence(sequence, entry, chars_per_line)
        if entry_chars == 0:
            raise EmptySequenceError(
                f"Empty sequence data (entry {entry} of FASTA input)"
            )
        data = b"".join(
            [b">", description.encode("ascii"), b"\n", b"\n".join(lines), b"\n"]
        )
        stream.write(data if binary else data.decode("ascii"))
