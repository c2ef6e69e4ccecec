# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "fastaio"
__all__ = ["LINE_WIDTH", "FastaWriter", "format_sequence"]

import sys
import warnings
from numbers import Integral
import numpy as np
from .error import (
    DescriptionTooLongWarning,
    EmbeddedNewlineError,
    EmptyDescriptionError,
    EmptySequenceError,
    MissingDescriptionMarkerError,
    NonAsciiCharacterError,
    NonAsciiDescriptionError,
    SingleLineDescriptionError,
    StrayMarkerError,
)
from .buffer import WHITESPACE
from .file import is_open_compatible, is_text, open_file, wrap_string


LINE_WIDTH = 80

_WHITESPACE_BYTES = WHITESPACE.encode("ascii")


class FastaWriter:
    """
    A streaming writer for files in FASTA format.

    The writer is a character sink:
    Data can be written either character by character
    (:meth:`write_char()`), line by line (:meth:`write()`) or
    entry by entry (:meth:`write_entry()`).
    When characters or lines are written, the writer detects the
    entry boundaries from the ``>`` characters at the start of a line.
    Sequence data is always rewrapped to lines of fixed width,
    whitespace in sequence data is removed.

    Parameters
    ----------
    file : file-like object or str, optional
        The file to be written to.
        Alternatively a file path can be supplied.
        By default, the data is written to the standard output.
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
        Only relevant, if a file path is supplied.

    Examples
    --------

    >>> import io
    >>> file = io.StringIO()
    >>> with FastaWriter(file) as writer:
    ...     writer.write([">seq1", "ACGT AC"])
    ...     writer.write_entry("seq2", ["TT", "TT"])
    >>> print(file.getvalue(), end="")
    >seq1
    ACGTAC
    >seq2
    TTTT
    """

    def __init__(self, file=None, mode="w", chars_per_line=LINE_WIDTH, compressed=None):
        if chars_per_line < 1:
            raise ValueError("The number of characters per line must be positive")
        if mode not in ("w", "a"):
            raise ValueError(f"Invalid file mode '{mode}'")
        self._chars_per_line = chars_per_line
        if file is None:
            self._stream = sys.stdout
            self._own_stream = False
        elif is_open_compatible(file):
            self._stream = open_file(file, mode, compressed)
            self._own_stream = True
        else:
            self._stream = file
            self._own_stream = False
        self._binary = not is_text(self._stream)

        self._in_seq = False
        self._entry_chars = 0
        # Includes the leading '>'
        self._desc_chars = 0
        self._parsed_nl = False
        self._pos = 0
        self._entry = 1
        self._at_start = True
        self._closed = False

    @property
    def entry(self):
        """
        The 1-based number of the entry currently written.
        """
        return self._entry

    @property
    def closed(self):
        return self._closed

    def write_char(self, char):
        """
        Write a single character.

        Parameters
        ----------
        char : str or int
            The character to be written, either as string of length 1
            or as ASCII code.

        Warns
        -----
        DescriptionTooLongWarning
            If a description line exceeds the line width.
        """
        self._check_open()
        char = _as_char(char, self._entry)

        if char == "\n" and not self._at_start:
            self._parsed_nl = True
            if not self._in_seq:
                if self._desc_chars == 1:
                    raise EmptyDescriptionError(
                        f"Empty description (entry {self._entry} of FASTA input)"
                    )
                self._emit(b"\n")
                self._pos = 0
                self._in_seq = True

        # Whitespace is only kept inside a description,
        # leading whitespace of the description is removed
        if char in WHITESPACE and (
            self._at_start or self._in_seq or self._desc_chars <= 1
        ):
            return

        if self._at_start and char != ">":
            raise MissingDescriptionMarkerError(
                f"No description given (entry {self._entry} of FASTA input)"
            )
        self._at_start = False

        if self._parsed_nl:
            if char == ">":
                if self._entry_chars == 0:
                    raise SingleLineDescriptionError(
                        f"Description must span a single line "
                        f"(entry {self._entry} of FASTA input)"
                    )
                self._emit(b"\n")
                self._in_seq = False
                self._pos = 0
                self._entry += 1
                self._entry_chars = 0
                self._desc_chars = 0
        elif self._in_seq and char == ">":
            raise StrayMarkerError(
                f"Character '>' not allowed in sequence data "
                f"(entry {self._entry} of FASTA input)"
            )

        if self._pos == self._chars_per_line:
            if not self._in_seq:
                warnings.warn(
                    f"Description line longer than {self._chars_per_line} "
                    f"characters (entry {self._entry} of FASTA input)",
                    DescriptionTooLongWarning,
                )
            else:
                self._emit(b"\n")
                self._pos = 0

        self._emit(char.encode("ascii"))
        self._pos += 1
        if self._in_seq:
            self._entry_chars += 1
        else:
            self._desc_chars += 1
        self._parsed_nl = False

    def write(self, item):
        """
        Write a line of text or multiple lines.

        Parameters
        ----------
        item : str or bytes or int or iterable
            A string (or bytes object) is written as a single line,
            i.e. a line break is appended.
            An integer is written as single character (ASCII code).
            For any other iterable each element is written
            recursively.
        """
        self._check_open()
        if isinstance(item, (str, bytes, bytearray)):
            for char in item:
                self.write_char(char)
            self.write_char("\n")
        elif isinstance(item, Integral):
            self.write_char(item)
        else:
            try:
                items = iter(item)
            except TypeError:
                raise TypeError(
                    f"Cannot write object of type '{type(item).__name__}'"
                )
            for sub_item in items:
                self.write(sub_item)

    def write_entry(self, description, sequence):
        """
        Write a complete entry.

        The entry is validated completely before anything is written.

        Parameters
        ----------
        description : str
            The description of the entry without the leading ``>``.
            Leading and trailing whitespace is removed.
        sequence : str or bytes or ndarray or iterable
            The sequence of the entry.
            Whitespace in the sequence is removed.

        Raises
        ------
        SingleLineDescriptionError
            If the previously written entry has no sequence data yet,
            e.g. when it was started with :meth:`write_char()`.

        Warns
        -----
        DescriptionTooLongWarning
            If the description line exceeds the line width.
        """
        self._check_open()
        if not self._at_start and self._entry_chars == 0:
            # The preceding entry has no sequence data yet
            raise SingleLineDescriptionError(
                f"Description must span a single line "
                f"(entry {self._entry} of FASTA input)"
            )
        entry = self._entry if self._at_start else self._entry + 1
        description = check_description(description, entry)
        lines, entry_chars = format_sequence(
            sequence, entry, self._chars_per_line
        )
        if entry_chars == 0:
            raise EmptySequenceError(
                f"Empty sequence data (entry {entry} of FASTA input)"
            )

        if not self._at_start:
            self.write_char("\n")
        self.write_char(">")
        for char in description:
            self.write_char(char)
        self.write_char("\n")
        self._emit(b"\n".join(lines))
        self._in_seq = True
        self._parsed_nl = False
        self._pos = len(lines[-1])
        self._entry_chars = entry_chars

    def close(self):
        """
        Terminate the last line and close the writer.

        The underlying stream is only closed, if the writer opened it
        itself, i.e. if a file path was given.
        """
        if self._closed:
            return
        self._closed = True
        try:
            try:
                if not self._at_start:
                    self._emit(b"\n")
                self._stream.flush()
            except (EOFError, BrokenPipeError):
                # The reading end is already gone
                pass
            self._pos = 0
            self._parsed_nl = True
        finally:
            if self._own_stream:
                self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return f"FastaWriter(output={self._stream!r}, entry={self._entry})"

    def _emit(self, data):
        if self._binary:
            self._stream.write(data)
        else:
            self._stream.write(data.decode("ascii"))

    def _check_open(self):
        if self._closed:
            raise ValueError("I/O operation on closed writer")


def format_sequence(sequence, entry=1, chars_per_line=LINE_WIDTH):
    """
    Remove whitespace from sequence data and wrap it into lines of
    fixed width.

    Parameters
    ----------
    sequence : str or bytes or ndarray or iterable
        The sequence data.
        An iterable may contain single characters or ASCII codes.
    entry : int, optional
        The number of the entry the sequence belongs to.
        Only used for error messages.
    chars_per_line : int, optional
        The maximum number of characters per line.

    Returns
    -------
    lines : list of bytes
        The wrapped lines without line breaks.
    count : int
        The number of sequence characters.

    Raises
    ------
    NonAsciiCharacterError
        If the sequence contains a non-ASCII character.
    StrayMarkerError
        If the sequence contains a ``>``.

    Examples
    --------

    >>> lines, count = format_sequence("ACGT ACGT\\nAC", chars_per_line=4)
    >>> print(lines, count)
    [b'ACGT', b'ACGT', b'AC'] 10
    """
    data = _as_ascii_bytes(sequence, entry)
    if b">" in data:
        raise StrayMarkerError(
            f"Character '>' not allowed in sequence data "
            f"(entry {entry} of FASTA input)"
        )
    data = data.translate(None, _WHITESPACE_BYTES)
    return wrap_string(data, chars_per_line), len(data)


def check_description(description, entry):
    """
    Validate a description and remove leading and trailing whitespace.
    """
    if isinstance(description, (bytes, bytearray)):
        if not description.isascii():
            raise NonAsciiDescriptionError(
                f"Non-ASCII description (entry {entry} of FASTA input)"
            )
        description = description.decode("ascii")
    if not isinstance(description, str):
        raise TypeError(
            f"Expected description string, got '{type(description).__name__}'"
        )
    if not description.isascii():
        raise NonAsciiDescriptionError(
            f"Non-ASCII description (entry {entry} of FASTA input)"
        )
    description = description.strip(WHITESPACE)
    if "\n" in description:
        raise EmbeddedNewlineError(
            f"Newlines are not allowed within description "
            f"(entry {entry} of FASTA input)"
        )
    if len(description) == 0:
        raise EmptyDescriptionError(
            f"Empty description (entry {entry} of FASTA input)"
        )
    return description


def _as_char(char, entry):
    if isinstance(char, Integral):
        if not 0 <= char < 128:
            raise NonAsciiCharacterError(
                f"Invalid (non-ASCII) character code {char} "
                f"(entry {entry} of FASTA input)"
            )
        return chr(char)
    if not isinstance(char, str) or len(char) != 1:
        raise TypeError(f"Expected a single character, got {char!r}")
    if not char.isascii():
        raise NonAsciiCharacterError(
            f"Invalid (non-ASCII) character {char!r} "
            f"(entry {entry} of FASTA input)"
        )
    return char


def _as_ascii_bytes(sequence, entry):
    if isinstance(sequence, (bytes, bytearray, memoryview)):
        data = bytes(sequence)
    elif isinstance(sequence, np.ndarray) and sequence.dtype == np.uint8:
        data = sequence.tobytes()
    else:
        if not isinstance(sequence, str):
            sequence = "".join(
                element if isinstance(element, str) else _as_char(element, entry)
                for element in sequence
            )
        try:
            data = sequence.encode("ascii")
        except UnicodeEncodeError as e:
            raise NonAsciiCharacterError(
                f"Invalid (non-ASCII) character {e.object[e.start]!r} "
                f"(entry {entry} of FASTA input)"
            ) from e
    if not data.isascii():
        raise NonAsciiCharacterError(
            f"Invalid (non-ASCII) character in sequence data "
            f"(entry {entry} of FASTA input)"
        )
    return data
