# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Incremental tokenization of a byte stream into chunks and lines.
"""

__name__ = "fastaio"
__all__ = ["CHUNK_SIZE", "GrowableBuffer", "ChunkedByteSource", "LineAssembler"]

import numpy as np
from .error import ReadFailureError


CHUNK_SIZE = 4096

_NEWLINE = ord("\n")
_CARRIAGE_RETURN = ord("\r")

# ASCII whitespace, excluding the information separators 0x1c-0x1f
WHITESPACE = " \t\n\r\x0b\x0c"


class GrowableBuffer:
    """
    A contiguous byte buffer with an explicit size, that grows
    geometrically when data is appended and never shrinks.

    Parameters
    ----------
    capacity : int, optional
        The initial capacity of the buffer in bytes.

    Examples
    --------

    >>> buffer = GrowableBuffer(capacity=2)
    >>> buffer.append(np.frombuffer(b"ACGT", dtype=np.uint8))
    >>> print(len(buffer), buffer.capacity)
    4 4
    >>> print(buffer.tobytes())
    b'ACGT'
    >>> buffer.clear()
    >>> print(len(buffer), buffer.capacity)
    0 4
    """

    def __init__(self, capacity=CHUNK_SIZE):
        if capacity < 1:
            raise ValueError("The capacity must be positive")
        self._data = np.zeros(capacity, dtype=np.uint8)
        self._size = 0

    @property
    def capacity(self):
        return len(self._data)

    def __len__(self):
        return self._size

    def __getitem__(self, index):
        return self._data[: self._size][index]

    def clear(self):
        self._size = 0

    def truncate(self, size):
        if size < 0 or size > self._size:
            raise IndexError(
                f"Cannot truncate buffer of size {self._size} to {size}"
            )
        self._size = size

    def append(self, data):
        """
        Append bytes to the end of the buffer.

        Parameters
        ----------
        data : ndarray, dtype=np.uint8
            The bytes to be appended.
        """
        new_size = self._size + len(data)
        if new_size > len(self._data):
            capacity = len(self._data)
            while capacity < new_size:
                capacity *= 2
            data_new = np.zeros(capacity, dtype=np.uint8)
            data_new[: self._size] = self._data[: self._size]
            self._data = data_new
        self._data[self._size : new_size] = data
        self._size = new_size

    def view(self):
        """
        Get the valid part of the buffer.

        Returns
        -------
        view : ndarray, dtype=np.uint8
            A view into the buffer.
            It is only valid until the buffer is modified the next time.
        """
        return self._data[: self._size]

    def tobytes(self):
        return self._data[: self._size].tobytes()


class ChunkedByteSource:
    """
    Serve chunks of fixed maximum size from a binary stream.

    The bytes are not interpreted in any way.

    Parameters
    ----------
    stream : file-like object
        A binary stream, providing a ``readinto()`` or ``read()``
        method.
    chunk_size : int, optional
        The maximum number of bytes read per chunk.
    """

    def __init__(self, stream, chunk_size=CHUNK_SIZE):
        if chunk_size < 1:
            raise ValueError("The chunk size must be positive")
        self._stream = stream
        self._chunk_size = chunk_size
        self._readinto = getattr(stream, "readinto", None)

    @property
    def chunk_size(self):
        return self._chunk_size

    def fill(self, buffer):
        """
        Read the next chunk from the stream into the given buffer.

        Parameters
        ----------
        buffer : ndarray, dtype=np.uint8
            The buffer to be filled.
            Must be at least as large as the chunk size.

        Returns
        -------
        count : int
            The number of bytes read into the buffer.
            0 indicates the end of the stream.

        Raises
        ------
        ReadFailureError
            If the underlying stream fails.
        """
        if len(buffer) < self._chunk_size:
            raise ValueError(
                f"Buffer of size {len(buffer)} cannot hold a chunk of size "
                f"{self._chunk_size}"
            )
        try:
            if self._readinto is not None:
                count = self._readinto(memoryview(buffer[: self._chunk_size]))
            else:
                data = self._stream.read(self._chunk_size)
                if data is None:
                    count = None
                else:
                    count = len(data)
                    buffer[:count] = np.frombuffer(data, dtype=np.uint8)
        except (OSError, EOFError) as e:
            raise ReadFailureError(f"Reading from the stream failed: {e}") from e
        if count is None:
            raise ReadFailureError("The stream has no data available")
        return count


class LineAssembler:
    """
    Assemble logical lines from the chunks of a
    :class:`ChunkedByteSource`.

    Lines are terminated by ``\\n``, optionally preceded by ``\\r``.
    The terminators are not part of the line.
    Empty lines are skipped, but lines consisting only of whitespace
    are not.
    The final line of the stream does not need a terminator.

    Parameters
    ----------
    source : ChunkedByteSource
        The source of the bytes.

    Examples
    --------

    >>> import io
    >>> stream = io.BytesIO(b">seq1\\r\\n\\nAC GT\\r\\n  \\nTT")
    >>> lines = LineAssembler(ChunkedByteSource(stream, chunk_size=4))
    >>> while lines.next_line():
    ...     print(lines.line.tobytes())
    b'>seq1'
    b'AC GT'
    b'  '
    b'TT'
    """

    def __init__(self, source):
        self._source = source
        self._rbuffer = np.zeros(source.chunk_size, dtype=np.uint8)
        self._line = GrowableBuffer(source.chunk_size)
        self.reset()

    def reset(self):
        """
        Discard all buffered data, e.g. after the underlying stream was
        rewound.
        """
        self._rbuf_sz = 0
        self._rbuf_pos = 0
        # Positions of all newline characters in the current chunk
        self._newlines = np.zeros(0, dtype=np.int64)
        self._nl_index = 0
        self._exhausted = False
        self._line.clear()

    @property
    def exhausted(self):
        """
        True, if the underlying source reported the end of the stream.
        """
        return self._exhausted

    @property
    def line(self):
        """
        The current line.
        The buffer is reused and overwritten by the next call of
        :meth:`next_line()`.
        """
        return self._line

    def next_line(self):
        """
        Assemble the next non-empty line.

        Returns
        -------
        success : bool
            False, if the stream is exhausted and no further line
            exists, true otherwise.
        """
        while True:
            terminated = self._assemble()
            if len(self._line) > 0:
                return True
            if not terminated:
                return False

    def _assemble(self):
        """
        Assemble the next line into the line buffer, including empty
        lines.
        Return whether the line was terminated by a newline.
        """
        self._line.clear()
        while True:
            if self._rbuf_pos >= self._rbuf_sz:
                if not self._refill():
                    # '\r' is only removed as part of a '\r\n' terminator,
                    # a lone '\r' at the end of the stream is kept
                    return False
            start = self._rbuf_pos
            if self._nl_index < len(self._newlines):
                stop = int(self._newlines[self._nl_index])
                self._nl_index += 1
                self._line.append(self._rbuffer[start:stop])
                self._rbuf_pos = stop + 1
                # The '\r' may be located in the previous chunk
                size = len(self._line)
                if size > 0 and self._line[size - 1] == _CARRIAGE_RETURN:
                    self._line.truncate(size - 1)
                return True
            else:
                self._line.append(self._rbuffer[start : self._rbuf_sz])
                self._rbuf_pos = self._rbuf_sz

    def _refill(self):
        if self._exhausted:
            return False
        count = self._source.fill(self._rbuffer)
        self._rbuf_sz = count
        self._rbuf_pos = 0
        self._nl_index = 0
        if count == 0:
            self._exhausted = True
            self._newlines = np.zeros(0, dtype=np.int64)
            return False
        self._newlines = np.flatnonzero(self._rbuffer[:count] == _NEWLINE)
        return True
