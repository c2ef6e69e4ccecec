# This source code is part of the FastaIO package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *FastaIO*, a streaming reader and
writer for files in FASTA format.

The :class:`FastaReader` parses a FASTA file entry by entry, so that at
most one entry is held in memory at a time.
Conversely, the :class:`FastaWriter` writes FASTA data entry by entry,
line by line or even character by character and wraps the sequence
data to lines of fixed width.
Both support gzip compressed files.

For the simple case the convenience functions :func:`read_fasta()` and
:func:`write_fasta()` read or write a complete file at once.
"""

__version__ = "0.1.0"
__name__ = "fastaio"

from .error import *
from .file import *
from .buffer import *
from .convert import *
from .reader import *
from .writer import *
from .general import *
