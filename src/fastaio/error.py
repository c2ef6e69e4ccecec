# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains all possible errors and warnings raised when
reading or writing FASTA files.
"""

__name__ = "fastaio"
__all__ = [
    "FastaError",
    "ReadFailureError",
    "NotSeekableError",
    "EndOfFileError",
    "InvalidFileError",
    "EmptyFileError",
    "MalformedRecordError",
    "EmptyDescriptionError",
    "NonAsciiDescriptionError",
    "NonAsciiCharacterError",
    "EmbeddedNewlineError",
    "MissingDescriptionMarkerError",
    "SingleLineDescriptionError",
    "StrayMarkerError",
    "EmptySequenceError",
    "DescriptionTooLongWarning",
]

import io


class FastaError(Exception):
    """
    Base class for all errors raised by this package.
    """

    pass


class ReadFailureError(FastaError, OSError):
    """
    Indicates that the underlying stream failed while a chunk was read.
    """

    pass


class NotSeekableError(FastaError, io.UnsupportedOperation):
    """
    Indicates that a reader cannot be rewound, because its underlying
    stream does not support seeking.
    """

    pass


class EndOfFileError(FastaError, EOFError):
    """
    Indicates that an entry was requested from an exhausted reader.
    """

    pass


class InvalidFileError(FastaError):
    """
    Indicates that the file is not suitable for the requested action,
    either because the file does not contain the required data or
    because the file is malformed.
    """

    pass


class EmptyFileError(InvalidFileError):
    pass


class MalformedRecordError(InvalidFileError):
    """
    Indicates that a record does not begin with a ``>`` description
    line.
    """

    pass


class EmptyDescriptionError(MalformedRecordError):
    pass


class NonAsciiDescriptionError(InvalidFileError):
    pass


class NonAsciiCharacterError(InvalidFileError):
    pass


class EmbeddedNewlineError(InvalidFileError):
    pass


class MissingDescriptionMarkerError(InvalidFileError):
    """
    Indicates that written data does not start with ``>``.
    """

    pass


class SingleLineDescriptionError(InvalidFileError):
    """
    Indicates that a description spans more than a single line, i.e.
    a new record was started before any sequence data was written.
    """

    pass


class StrayMarkerError(InvalidFileError):
    """
    Indicates a ``>`` character inside sequence data.
    """

    pass


class EmptySequenceError(InvalidFileError):
    pass


class DescriptionTooLongWarning(UserWarning):
    """
    Indicates that a description line exceeds the line width.
    The description is written nevertheless.
    """

    pass
