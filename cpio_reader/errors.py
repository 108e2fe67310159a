"""Exceptions raised while decoding cpio archives.

DecodeError and its subclasses describe why one header format declined an
entry. NoMatchingFormatError is what a reader reports when every format
declined. TrailerReached is an internal signal for the end-of-archive entry.
"""


class CpioError(Exception):
    """Base class for all cpio_reader errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DecodeError(CpioError):
    """A header format could not decode the bytes at the current position."""


class BadMagicError(DecodeError):
    pass


class TruncatedError(DecodeError):
    """Fewer bytes remain than a field needs."""

    def __init__(self, wanted: int, available: int):
        super().__init__(f"wanted {wanted} bytes, only {available} available")
        self.wanted = wanted
        self.available = available


class InvalidNumberError(DecodeError):
    """A numeric text field held something other than digits of its radix."""


class InvalidNameError(DecodeError):
    """The name field is empty or is not valid UTF-8."""


class ChecksumError(DecodeError):

    def __init__(self, expected: int, actual: int):
        super().__init__(f"checksum mismatch: header says {expected:#010x}, "
                         f"content sums to {actual:#010x}")
        self.expected = expected
        self.actual = actual


class NoMatchingFormatError(CpioError):
    """None of the header formats could decode the entry at `offset`.

    `reasons` holds a (format name, DecodeError) pair per format tried.
    """

    def __init__(self, offset: int, reasons):
        details = "; ".join(f"{name}: {err.message}" for name, err in reasons)
        super().__init__(f"undecodable cpio entry at offset {offset} ({details})")
        self.offset = offset
        self.reasons = list(reasons)


class TrailerReached(CpioError):
    """The end-of-archive entry was decoded."""

    def __init__(self, offset: int):
        super().__init__(f"end of archive marker at offset {offset}")
        self.offset = offset
