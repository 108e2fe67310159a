"""Bounds-checked read head over a borrowed byte buffer."""

import enum
import string

from cpio_reader.errors import InvalidNameError, InvalidNumberError, TruncatedError

U32_MAX = 0xFFFFFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF

OCTAL_DIGITS = frozenset(string.octdigits)
HEX_DIGITS = frozenset(string.hexdigits)


class Endianness(enum.Enum):
    BIG = "big"
    LITTLE = "little"

    def to_u16(self, two_bytes) -> int:
        return int.from_bytes(two_bytes, self.value)


def readonly_view(data) -> memoryview:
    """Return a read-only, one byte per item view of `data`."""
    view = memoryview(data)
    if view.ndim != 1 or view.itemsize != 1:
        view = view.cast("B")
    return view.toreadonly()


class ByteCursor(object):
    """Sequential reader of fixed-size fields.

    `position` counts the bytes consumed since the cursor was created, skips
    past the end of the buffer included, so alignment is always computed
    relative to the start of the entry being decoded. The underlying buffer
    is never modified and takes never copy it.
    """

    def __init__(self, data):
        self._data = readonly_view(data)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def available(self) -> int:
        return max(len(self._data) - self._pos, 0)

    def remaining(self) -> memoryview:
        return self._data[self._pos:]

    def take_byte(self) -> int:
        return self.take_bytes(1)[0]

    def take_bytes(self, n: int) -> memoryview:
        available = self.available()
        if n < 0 or n > available:
            raise TruncatedError(n, available)
        chunk = self._data[self._pos:self._pos + n]
        self._pos += n
        return chunk

    def take_str(self, n: int) -> str:
        start = self._pos
        raw = self.take_bytes(n)
        try:
            return str(raw, "utf-8")
        except UnicodeDecodeError as e:
            self._pos = start
            raise InvalidNameError(f"not valid UTF-8: {e.reason}") from e

    def take_u16(self, endianness: Endianness) -> int:
        return endianness.to_u16(self.take_bytes(2))

    def take_octal_u32(self, n: int) -> int:
        return self._take_number(n, 8, OCTAL_DIGITS, U32_MAX)

    def take_octal_u64(self, n: int) -> int:
        return self._take_number(n, 8, OCTAL_DIGITS, U64_MAX)

    def take_hex_u32(self) -> int:
        return self._take_number(8, 16, HEX_DIGITS, U32_MAX)

    def _take_number(self, n, base, digits, limit):
        start = self._pos
        text = bytes(self.take_bytes(n)).decode("latin-1")
        # int() alone would also accept signs, underscores and whitespace.
        if not text or not digits.issuperset(text):
            self._pos = start
            raise InvalidNumberError(f"{text!r} is not a base {base} number")
        value = int(text, base)
        if value > limit:
            self._pos = start
            raise InvalidNumberError(f"{text!r} does not fit in {limit.bit_length()} bits")
        return value

    def skip(self, n: int) -> None:
        self._pos += n

    def skip_to_alignment(self, k: int) -> None:
        self.skip(-self._pos % k)
