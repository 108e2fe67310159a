"""cpio header formats.

Each parse_* function decodes one entry from the start of `data` and returns
(entry, remaining bytes), or raises a DecodeError subclass when the bytes are
not that format or are truncated or corrupt. parse_entry tries them in order.

Decent docs at
https://github.com/libyal/dtformats/blob/main/documentation/Copy%20in%20and%20out%20(CPIO)%20archive%20format.asciidoc
"""

import logging
from typing import Optional, Tuple

from cpio_reader.byte_cursor import ByteCursor, Endianness
from cpio_reader.entry import Entry
from cpio_reader.errors import (
    BadMagicError,
    ChecksumError,
    DecodeError,
    InvalidNameError,
    NoMatchingFormatError,
    TrailerReached,
)
from cpio_reader.mode import Mode

_log = logging.getLogger(__name__)

TRAILER_NAME = "TRAILER!!!"

OLD_BINARY_MAGIC = 0o070707
PORTABLE_ASCII_MAGIC = b"070707"
NEW_ASCII_MAGIC = b"070701"
NEW_CRC_MAGIC = b"070702"


def _take_name(cursor: ByteCursor, namesize: int) -> str:
    # namesize counts the terminating NUL.
    if namesize == 0:
        raise InvalidNameError("name size is zero")
    return cursor.take_str(namesize - 1)


def parse_old_binary(data) -> Tuple[Entry, memoryview]:
    # Bytes  Field
    # 2      magic 070707, in the byte order of the machine that wrote it
    # 2      dev
    # 2      ino
    # 2      mode
    # 2      uid
    # 2      gid
    # 2      nlink
    # 2      rdev
    # 4      mtime, as two shorts, most significant first
    # 2      namesize, including the terminating NUL
    # 4      filesize, as two shorts, most significant first
    # The name is padded to an even length, and so is the content.
    cursor = ByteCursor(data)
    magic = cursor.take_bytes(2)
    if Endianness.BIG.to_u16(magic) == OLD_BINARY_MAGIC:
        order = Endianness.BIG
    elif Endianness.LITTLE.to_u16(magic) == OLD_BINARY_MAGIC:
        order = Endianness.LITTLE
    else:
        raise BadMagicError(f"{bytes(magic)!r} is not a binary cpio magic")

    dev = cursor.take_u16(order)
    ino = cursor.take_u16(order)
    mode = cursor.take_u16(order)
    uid = cursor.take_u16(order)
    gid = cursor.take_u16(order)
    nlink = cursor.take_u16(order)
    rdev = cursor.take_u16(order)
    mtime_most = cursor.take_u16(order)
    mtime_least = cursor.take_u16(order)
    namesize = cursor.take_u16(order)
    filesize_most = cursor.take_u16(order)
    filesize_least = cursor.take_u16(order)
    filesize = (filesize_most << 16) | filesize_least

    name = _take_name(cursor, namesize)
    # The NUL, plus a pad byte when namesize is odd.
    cursor.skip(namesize % 2 + 1)
    file = cursor.take_bytes(filesize)
    cursor.skip(filesize % 2)

    entry = Entry(
        name=name,
        file=file,
        mode=Mode.from_bits(mode),
        ino=ino,
        uid=uid,
        gid=gid,
        nlink=nlink,
        mtime=(mtime_most << 16) | mtime_least,
        dev=dev,
        rdev=rdev,
    )
    return entry, cursor.remaining()


def parse_portable_ascii(data) -> Tuple[Entry, memoryview]:
    # Size  Field (octal text)
    # 6     magic "070707"
    # 6     dev
    # 6     ino
    # 6     mode
    # 6     uid
    # 6     gid
    # 6     nlink
    # 6     rdev
    # 11    mtime
    # 6     namesize, including the terminating NUL
    # 11    filesize
    # The name and the content follow without any padding.
    cursor = ByteCursor(data)
    magic = cursor.take_bytes(6)
    if magic != PORTABLE_ASCII_MAGIC:
        raise BadMagicError(f"{bytes(magic)!r} is not the odc magic")

    dev = cursor.take_octal_u32(6)
    ino = cursor.take_octal_u32(6)
    mode = cursor.take_octal_u32(6)
    uid = cursor.take_octal_u32(6)
    gid = cursor.take_octal_u32(6)
    nlink = cursor.take_octal_u32(6)
    rdev = cursor.take_octal_u32(6)
    mtime = cursor.take_octal_u64(11)
    namesize = cursor.take_octal_u32(6)
    filesize = cursor.take_octal_u64(11)

    name = _take_name(cursor, namesize)
    cursor.skip(1)
    file = cursor.take_bytes(filesize)

    entry = Entry(
        name=name,
        file=file,
        mode=Mode.from_bits(mode),
        ino=ino,
        uid=uid,
        gid=gid,
        nlink=nlink,
        mtime=mtime,
        dev=dev,
        rdev=rdev,
    )
    return entry, cursor.remaining()


def content_checksum(content) -> int:
    """Sum of the content bytes, modulo 2**32, as stored by the crc format."""
    return sum(content) & 0xFFFFFFFF


def parse_new_ascii(data) -> Tuple[Entry, memoryview]:
    # Size      Field (hex text)
    # 6         magic: "070701", or "070702" when the checksum is filled in
    # 8         ino
    # 8         mode
    # 8         uid
    # 8         gid
    # 8         nlink
    # 8         mtime
    # 8         filesize
    # 8         devmajor
    # 8         devminor
    # 8         rdevmajor
    # 8         rdevminor
    # 8         namesize, including the terminating NUL
    # 8         check: sum of the content bytes if magic is "070702", else 0
    # namesize  name
    # .         pad to a multiple of 4 from the start of the header
    # filesize  content
    # .         pad to a multiple of 4
    cursor = ByteCursor(data)
    magic = cursor.take_bytes(6)
    if magic == NEW_CRC_MAGIC:
        is_crc = True
    elif magic == NEW_ASCII_MAGIC:
        is_crc = False
    else:
        raise BadMagicError(f"{bytes(magic)!r} is not a newc or crc magic")

    ino = cursor.take_hex_u32()
    mode = Mode.from_bits(cursor.take_hex_u32())
    uid = cursor.take_hex_u32()
    gid = cursor.take_hex_u32()
    nlink = cursor.take_hex_u32()
    mtime = cursor.take_hex_u32()
    filesize = cursor.take_hex_u32()
    devmajor = cursor.take_hex_u32()
    devminor = cursor.take_hex_u32()
    rdevmajor = cursor.take_hex_u32()
    rdevminor = cursor.take_hex_u32()
    namesize = cursor.take_hex_u32()
    check = cursor.take_hex_u32()

    name = _take_name(cursor, namesize)
    cursor.skip(1)
    cursor.skip_to_alignment(4)
    file = cursor.take_bytes(filesize)

    # GNU cpio does not verify the checksum of symbolic links (copyin.c).
    if is_crc and not mode.contains(Mode.SYMBOLIC_LINK):
        actual = content_checksum(file)
        if actual != check:
            raise ChecksumError(check, actual)

    cursor.skip_to_alignment(4)

    entry = Entry(
        name=name,
        file=file,
        mode=mode,
        ino=ino,
        uid=uid,
        gid=gid,
        nlink=nlink,
        mtime=mtime,
        devmajor=devmajor,
        devminor=devminor,
        rdevmajor=rdevmajor,
        rdevminor=rdevminor,
    )
    return entry, cursor.remaining()


# Tried in this order; the first one that decodes the entry wins.
DECODERS = (
    ("old binary", parse_old_binary),
    ("portable ascii", parse_portable_ascii),
    ("new ascii", parse_new_ascii),
)


def parse_entry(data, offset: int = 0) -> Tuple[Entry, memoryview]:
    """Decode the entry at the start of `data` with the first format that fits.

    Args:
        data: the undecoded tail of the archive.
        offset: where `data` starts in the archive; only used in messages.

    Returns:
        (entry, remaining bytes)

    Raises:
        NoMatchingFormatError: no format could decode the entry.
        TrailerReached: the entry is the end-of-archive marker.
    """
    reasons = []
    for name, decoder in DECODERS:
        try:
            entry, remaining = decoder(data)
        except DecodeError as e:
            _log.debug("offset %d is not %s: %s", offset, name, e.message)
            reasons.append((name, e))
            continue
        _log.debug("offset %d: %s entry %r, %d bytes", offset, name,
                   entry.name, entry.size)
        if entry.name == TRAILER_NAME:
            raise TrailerReached(offset)
        return entry, remaining
    raise NoMatchingFormatError(offset, reasons)


def decode_entry(data) -> Optional[Tuple[Entry, memoryview]]:
    """Like parse_entry, but returns None instead of raising."""
    try:
        return parse_entry(data)
    except (NoMatchingFormatError, TrailerReached):
        return None
