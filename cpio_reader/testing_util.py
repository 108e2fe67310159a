"""Builders for in-memory cpio archives, used by the tests.

Each *_member function returns the bytes of one archive member in the named
format. Metadata defaults to a regular 0644 file owned by uid/gid 1000.
"""

import struct

from cpio_reader.formats import TRAILER_NAME, content_checksum

DEFAULTS = {
    "ino": 1,
    "mode": 0o100644,
    "uid": 1000,
    "gid": 1000,
    "nlink": 1,
    "mtime": 1629615520,
}


def _fields(kwargs):
    fields = dict(DEFAULTS)
    fields.update(kwargs)
    return fields


def old_binary_member(name: str, data: bytes = b"", big_endian=False,
                      namesize=None, dev=2050, rdev=0, **kwargs) -> bytes:
    f = _fields(kwargs)
    raw_name = name.encode("utf-8") + b"\0"
    if namesize is None:
        namesize = len(raw_name)
    header = struct.pack(
        (">" if big_endian else "<") + "13H",
        0o070707,
        dev,
        f["ino"],
        f["mode"],
        f["uid"],
        f["gid"],
        f["nlink"],
        rdev,
        f["mtime"] >> 16,
        f["mtime"] & 0xFFFF,
        namesize,
        len(data) >> 16,
        len(data) & 0xFFFF,
    )
    name_pad = b"\0" * (len(raw_name) % 2)
    data_pad = b"\0" * (len(data) % 2)
    return header + raw_name + name_pad + data + data_pad


def odc_member(name: str, data: bytes = b"", namesize=None, dev=2050, rdev=0,
               **kwargs) -> bytes:
    f = _fields(kwargs)
    raw_name = name.encode("utf-8") + b"\0"
    if namesize is None:
        namesize = len(raw_name)
    header = "070707%06o%06o%06o%06o%06o%06o%06o%011o%06o%011o" % (
        dev,
        f["ino"],
        f["mode"],
        f["uid"],
        f["gid"],
        f["nlink"],
        rdev,
        f["mtime"],
        namesize,
        len(data),
    )
    return header.encode("ascii") + raw_name + data


def _pad4(n: int) -> bytes:
    return b"\0" * (-n % 4)


def newc_member(name: str, data: bytes = b"", crc=False, check=None,
                namesize=None, devmajor=0, devminor=26, rdevmajor=0,
                rdevminor=0, **kwargs) -> bytes:
    f = _fields(kwargs)
    raw_name = name.encode("utf-8") + b"\0"
    if namesize is None:
        namesize = len(raw_name)
    if check is None:
        check = content_checksum(data) if crc else 0
    header = (b"070702" if crc else b"070701") + b"".join(
        b"%08x" % value for value in (
            f["ino"],
            f["mode"],
            f["uid"],
            f["gid"],
            f["nlink"],
            f["mtime"],
            len(data),
            devmajor,
            devminor,
            rdevmajor,
            rdevminor,
            namesize,
            check,
        ))
    head = header + raw_name
    return head + _pad4(len(head)) + data + _pad4(len(data))


def trailer(member=newc_member, **kwargs) -> bytes:
    return member(TRAILER_NAME, b"", ino=0, mode=0, nlink=1, mtime=0, **kwargs)
