# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "fastaio"
__all__ = ["open_file"]

import gzip
import io
from os import PathLike, fspath


def open_file(file, mode, compressed=None):
    """
    Open a file path in binary mode, optionally with transparent gzip
    (de-)compression.

    Parameters
    ----------
    file : str or bytes or PathLike
        The path of the file to be opened.
    mode : {'r', 'w', 'a'}
        The mode the file is opened with.
        The file is always opened as binary file.
    compressed : bool, optional
        Whether the file is gzip compressed.
        By default, a file is assumed to be compressed, if the path
        ends with ``.gz``.

    Returns
    -------
    stream : file-like object
        The opened binary stream.
    """
    if mode not in ("r", "w", "a"):
        raise ValueError(f"Invalid file mode '{mode}'")
    if compressed is None:
        compressed = is_gzip_path(file)
    if compressed:
        return gzip.open(file, mode + "b")
    else:
        return open(file, mode + "b")


def wrap_string(text, width):
    """
    A much simpler and hence much more efficient version of
    `textwrap.wrap()`.

    This function simply wraps the given `text` after `width`
    characters, ignoring sentences, whitespaces, etc.
    It works for :class:`str` as well as :class:`bytes` objects.

    Parameters
    ----------
    text : str or bytes
        The text to be wrapped.
    width : int
        The maximum number of characters per line.

    Returns
    -------
    lines : list of str or list of bytes
        The wrapped lines.
    """
    lines = []
    for i in range(0, len(text), width):
        lines.append(text[i : i + width])
    return lines


def is_gzip_path(file):
    path = fspath(file)
    if isinstance(path, bytes):
        return path.endswith(b".gz")
    return path.endswith(".gz")


def is_text(file):
    if isinstance(file, io.TextIOBase):
        return True
    # for file wrappers, e.g. 'TemporaryFile'
    return hasattr(file, "file") and isinstance(file.file, io.TextIOBase)


def is_open_compatible(file):
    return isinstance(file, (str, bytes, PathLike))


def is_seekable(file):
    seekable = getattr(file, "seekable", None)
    if seekable is None:
        return hasattr(file, "seek")
    return seekable()
