"""cpio archive reader.

Reads the members of a cpio archive held in memory. Nothing is copied: every
Entry points back into the buffer passed in.

Usage:
    for entry in iter_files(data):
        print(entry.name, entry.size)
or
    cpio = CpioReader(data)
    while True:
        entry = cpio.next()
        if not entry:
            break
        # do something with entry
    if cpio.error:
        # the archive ended with something that was not a cpio entry

Iteration simply stops at the end-of-archive marker, at the end of the
buffer, or at the first entry that no format can decode. Pass strict=True to
get a NoMatchingFormatError for the last case instead.
"""

import logging
from typing import Iterator, Optional

from cpio_reader.byte_cursor import readonly_view
from cpio_reader.entry import Entry
from cpio_reader.errors import NoMatchingFormatError, TrailerReached
from cpio_reader.formats import parse_entry

_log = logging.getLogger(__name__)


class CpioReader(object):

    def __init__(self, data, strict: bool = False):
        """Initialize CpioReader over an in-memory archive.

        Args:
            data: bytes, bytearray, memoryview or any other buffer holding
                the archive. It must not be modified while entries are in use.
            strict: raise NoMatchingFormatError when the archive contains an
                undecodable entry rather than just stopping.
        """
        if isinstance(data, str):
            raise TypeError("cpio archives are bytes, not str")
        self._remaining = readonly_view(data)
        self.strict = strict
        self.offset = 0
        self.error: Optional[NoMatchingFormatError] = None
        self.reached_trailer = False
        self.done = False

    def next(self) -> Optional[Entry]:
        """Return the next Entry, or None if there are no more."""
        if self.done:
            return None
        if not self._remaining:
            _log.debug("end of buffer after %d bytes", self.offset)
            self._finish()
            return None
        try:
            entry, remaining = parse_entry(self._remaining, self.offset)
        except TrailerReached:
            self.reached_trailer = True
            self._finish()
            return None
        except NoMatchingFormatError as e:
            _log.debug("%s", e.message)
            self.error = e
            self._finish()
            if self.strict:
                raise
            return None
        self.offset += len(self._remaining) - len(remaining)
        self._remaining = remaining
        return entry

    def _finish(self):
        self._remaining = self._remaining[:0]
        self.done = True

    def is_done(self) -> bool:
        """Return True if all entries have been read."""
        return self.done

    def __iter__(self) -> Iterator[Entry]:
        return self

    def __next__(self) -> Entry:
        entry = self.next()
        if entry is None:
            raise StopIteration
        return entry


def iter_files(data) -> CpioReader:
    """Return an iterator over the entries of the cpio archive in `data`."""
    return CpioReader(data)
