"""File type and permission bits of a cpio entry."""

import enum

# Same layout as the st_mode masks in the stat module.
TYPE_MASK = 0o170000
PERMISSION_MASK = 0o007777


class Mode(enum.IntFlag):
    """File information.

    The file type values overlap bitwise (a symlink, 0o120000, shares bits
    with a regular file and a character device), so `in` is a bit test and
    says nothing about exclusivity. Use file_type() to compare types.

    The USER_* and WORLD_* names are swapped compared with POSIX:
    USER_EXECUTABLE is 0o001 (S_IXOTH) and WORLD_READABLE is 0o400
    (S_IRUSR). The values are the real bits; only the names differ.
    """

    USER_EXECUTABLE = 0o000001
    USER_WRITABLE = 0o000002
    USER_READABLE = 0o000004

    GROUP_EXECUTABLE = 0o000010
    GROUP_WRITABLE = 0o000020
    GROUP_READABLE = 0o000040

    WORLD_EXECUTABLE = 0o000100
    WORLD_WRITABLE = 0o000200
    WORLD_READABLE = 0o000400

    STICKY = 0o001000
    SGID = 0o002000
    SUID = 0o004000

    NAMED_PIPE_FIFO = 0o010000
    CHARACTER_SPECIAL_DEVICE = 0o020000
    DIRECTORY = 0o040000
    BLOCK_SPECIAL_DEVICE = 0o060000
    REGULAR_FILE = 0o100000
    SYMBOLIC_LINK = 0o120000
    SOCKET = 0o140000

    @classmethod
    def from_bits(cls, bits: int) -> "Mode":
        """Wrap a raw mode word. Every 32-bit value is accepted."""
        if not 0 <= bits <= 0xFFFFFFFF:
            raise ValueError(f"mode {bits:#o} does not fit in 32 bits")
        return cls(bits)

    def contains(self, other: "Mode") -> bool:
        return int(self) & int(other) == int(other)

    def file_type(self) -> "Mode":
        return Mode(int(self) & TYPE_MASK)

    def permissions(self) -> "Mode":
        return Mode(int(self) & PERMISSION_MASK)
