# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Conversion of raw sequence bytes into the representation requested by
the user of a :class:`FastaReader`.
"""

__name__ = "fastaio"
__all__ = ["get_converter"]

import numpy as np
from .error import NonAsciiCharacterError


def _to_bytes(data):
    return data.tobytes()


def _to_bytearray(data):
    return bytearray(data.tobytes())


def _to_str(data):
    try:
        return data.tobytes().decode("ascii")
    except UnicodeDecodeError as e:
        raise NonAsciiCharacterError(
            f"Sequence data contains the non-ASCII byte "
            f"0x{e.object[e.start]:02x}"
        ) from e


def _to_chars(data):
    return list(_to_str(data))


def _to_array(data):
    # Copy, as the data is a view into a reused buffer
    return data.copy()


_CONVERTERS = {
    bytes: _to_bytes,
    bytearray: _to_bytearray,
    str: _to_str,
    list: _to_chars,
    np.ndarray: _to_array,
}


def get_converter(out_type):
    """
    Get a function that converts sequence bytes into the given
    representation.

    Parameters
    ----------
    out_type : type or callable
        The requested representation of the sequence.
        ``str``, ``bytes``, ``bytearray``, ``list``
        (a list of single-character strings) and
        :class:`numpy.ndarray` (a ``uint8`` array of character codes)
        are supported directly.
        Any other callable is given the sequence as :class:`bytes`.

    Returns
    -------
    converter : callable
        A function taking a ``uint8`` :class:`ndarray` view and
        returning the sequence in the requested representation.

    Examples
    --------

    >>> data = np.frombuffer(b"ACGT", dtype=np.uint8)
    >>> print(get_converter(str)(data))
    ACGT
    >>> print(get_converter(list)(data))
    ['A', 'C', 'G', 'T']
    >>> print(get_converter(np.ndarray)(data))
    [65 67 71 84]
    >>> print(get_converter(lambda b: b.lower())(data))
    b'acgt'
    """
    converter = _CONVERTERS.get(out_type)
    if converter is not None:
        return converter
    if not callable(out_type):
        raise TypeError(f"'{out_type}' is not a valid sequence representation")

    def convert(data):
        return out_type(data.tobytes())

    return convert


def get_type_name(out_type):
    return getattr(out_type, "__name__", repr(out_type))
