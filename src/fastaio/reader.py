# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "fastaio"
__all__ = ["FastaReader"]

import io
from .buffer import (
    CHUNK_SIZE,
    WHITESPACE,
    ChunkedByteSource,
    GrowableBuffer,
    LineAssembler,
)
from .convert import get_converter, get_type_name
from .error import (
    EmptyDescriptionError,
    EmptyFileError,
    EndOfFileError,
    MalformedRecordError,
    NonAsciiDescriptionError,
    NotSeekableError,
)
from .file import is_open_compatible, is_seekable, is_text, open_file


_MARKER = ord(">")


class FastaReader:
    """
    A streaming reader for files in FASTA format.

    In contrast to reading the complete file at once, the reader parses
    one entry at a time and holds at most one entry in memory.
    Hence, it is suitable for very large files.

    Each entry consists of a *description*, the header line without the
    leading ``>``, and the *sequence*, the concatenated lines following
    the description.
    Empty lines are ignored and both, ``\\n`` and ``\\r\\n`` line
    endings, are supported.

    There are two ways to obtain the entries:
    Iterating over the reader always starts from the beginning of the
    file, i.e. the reader is implicitly rewound.
    In contrast, :meth:`read_entry()` continues from the current
    position.

    Parameters
    ----------
    file : file-like object or str
        The file to be read.
        Alternatively a file path can be supplied.
        A file-like object must be opened in binary mode.
    out_type : type or callable, optional
        The representation of the returned sequences.
        By default, the sequence is returned as :class:`str`.
        Other supported types are ``bytes``, ``bytearray``, ``list``
        (of single characters) and :class:`numpy.ndarray`.
        Any other callable is called with the sequence as
        :class:`bytes`.
    chunk_size : int, optional
        The number of bytes read from the file at once.
    compressed : bool, optional
        Whether the file is gzip compressed.
        By default, a file path ending with ``.gz`` is considered to be
        compressed.
        Only relevant, if a file path is supplied.

    Attributes
    ----------
    num_parsed : int
        The number of entries parsed since the creation of the reader
        or the last call of :meth:`rewind()`.

    Examples
    --------

    >>> import io
    >>> file = io.BytesIO(b">seq1\\nACGT\\nAC\\n>seq2\\nTTTT\\n")
    >>> with FastaReader(file) as reader:
    ...     for description, sequence in reader:
    ...         print(reader.num_parsed, description, sequence)
    1 seq1 ACGTAC
    2 seq2 TTTT

    Reading the entries manually continues where the last call
    stopped:

    >>> file = io.BytesIO(b">seq1\\nACGT\\nAC\\n>seq2\\nTTTT\\n")
    >>> with FastaReader(file, out_type=bytes) as reader:
    ...     while not reader.eof():
    ...         print(reader.read_entry())
    ('seq1', b'ACGTAC')
    ('seq2', b'TTTT')
    """

    def __init__(self, file, out_type=str, chunk_size=CHUNK_SIZE, compressed=None):
        self._convert = get_converter(out_type)
        self._out_type = out_type
        if is_open_compatible(file):
            self._stream = open_file(file, "r", compressed)
            self._own_stream = True
        else:
            if is_text(file):
                raise TypeError("A file opened in 'binary' mode is required")
            self._stream = file
            self._own_stream = False
        self._lines = LineAssembler(ChunkedByteSource(self._stream, chunk_size))
        self._sequence = GrowableBuffer(chunk_size)
        self._num_parsed = 0
        self._is_eof = False
        # True, after the first line has been assembled
        self._started = False
        self._closed = False

    @property
    def num_parsed(self):
        return self._num_parsed

    @property
    def out_type(self):
        return self._out_type

    @property
    def closed(self):
        return self._closed

    def eof(self):
        """
        Check whether all entries have been read.

        Returns
        -------
        eof : bool
            True, if the end of the file has been reached and no
            further entry can be read.
        """
        return self._is_eof

    def rewind(self):
        """
        Go back to the beginning of the file.

        All buffered data is discarded and :attr:`num_parsed` is reset.

        Raises
        ------
        NotSeekableError
            If the underlying stream does not support seeking.
        """
        self._check_open()
        if not is_seekable(self._stream):
            raise NotSeekableError("The underlying stream is not seekable")
        try:
            self._stream.seek(0)
        except io.UnsupportedOperation as e:
            raise NotSeekableError(str(e)) from e
        self._lines.reset()
        self._sequence.clear()
        self._is_eof = False
        self._num_parsed = 0
        self._started = False

    def read_entry(self):
        """
        Read the next entry of the file.

        Returns
        -------
        description : str
            The description of the entry without the leading ``>``.
        sequence : object
            The sequence of the entry in the representation given by
            `out_type`.

        Raises
        ------
        EndOfFileError
            If all entries have already been read.
        EmptyFileError
            If the file does not contain any data.
        MalformedRecordError
            If the entry does not start with a description line.
        """
        self._check_open()
        if self._is_eof:
            raise EndOfFileError("The end of the file has been reached")
        if not self._started:
            self._prime()
        return self._next_record()

    def read_all(self):
        """
        Read all entries of the file, starting from the beginning.

        Returns
        -------
        entries : list of tuple(str, object)
            The description and sequence of each entry.
        """
        return list(self)

    def close(self):
        """
        Close the reader.

        The underlying stream is only closed, if the reader opened it
        itself, i.e. if a file path was given.
        """
        if self._closed:
            return
        self._closed = True
        if self._own_stream:
            self._stream.close()

    def __iter__(self):
        self._check_open()
        # A fresh reader of a non-seekable stream is already at the
        # beginning
        if self._started or self._is_eof or is_seekable(self._stream):
            self.rewind()
        return self._iter_entries()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return (
            f"FastaReader(input={self._stream!r}, "
            f"out_type={get_type_name(self._out_type)}, "
            f"num_parsed={self._num_parsed}, eof={self._is_eof})"
        )

    def _iter_entries(self):
        self._prime()
        while not self._is_eof:
            yield self._next_record()

    def _prime(self):
        if not self._lines.next_line():
            self._is_eof = True
            raise EmptyFileError("File is empty")
        self._started = True

    def _next_record(self):
        # The current line is the not yet consumed description line
        line = self._lines.line
        if line[0] != _MARKER:
            raise MalformedRecordError(
                f"Entry {self._num_parsed + 1} starts with "
                f"{line.tobytes()[:1]!r} instead of b'>'"
            )
        try:
            description = line[1:].tobytes().decode("ascii").strip(WHITESPACE)
        except UnicodeDecodeError as e:
            raise NonAsciiDescriptionError(
                f"Description of entry {self._num_parsed + 1} contains "
                f"non-ASCII characters"
            ) from e
        if len(description) == 0:
            raise EmptyDescriptionError(
                f"Entry {self._num_parsed + 1} has an empty description"
            )

        self._sequence.clear()
        while True:
            if not self._lines.next_line():
                self._is_eof = True
                break
            line = self._lines.line
            if line[0] == _MARKER:
                # Keep the description line for the next entry
                break
            self._sequence.append(line.view())

        sequence = self._convert(self._sequence.view())
        self._num_parsed += 1
        return description, sequence

    def _check_open(self):
        if self._closed:
            raise ValueError("I/O operation on closed reader")
