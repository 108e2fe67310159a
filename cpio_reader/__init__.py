"""Zero-copy reader for cpio archives held in memory.

Supports the Old Binary (either byte order), Portable ASCII (odc), New ASCII
(newc) and New CRC formats, detected from each entry's magic.
"""

from cpio_reader.entry import Entry
from cpio_reader.errors import (
    BadMagicError,
    ChecksumError,
    CpioError,
    DecodeError,
    InvalidNameError,
    InvalidNumberError,
    NoMatchingFormatError,
    TruncatedError,
)
from cpio_reader.formats import TRAILER_NAME, decode_entry, parse_entry
from cpio_reader.mode import Mode
from cpio_reader.reader import CpioReader, iter_files

__all__ = [
    "BadMagicError",
    "ChecksumError",
    "CpioError",
    "CpioReader",
    "DecodeError",
    "Entry",
    "InvalidNameError",
    "InvalidNumberError",
    "Mode",
    "NoMatchingFormatError",
    "TRAILER_NAME",
    "TruncatedError",
    "decode_entry",
    "iter_files",
    "parse_entry",
]
