"""A decoded cpio archive member."""

from dataclasses import dataclass
from typing import Optional

from cpio_reader.mode import Mode


@dataclass(frozen=True)
class Entry:
    """One member of a cpio archive.

    `file` is a read-only view into the buffer the archive was decoded from,
    so an Entry is only usable while that buffer is alive. For symbolic links
    it holds the link target. In the New ASCII formats a hard link that is not
    the last copy of its inode carries an empty `file`.

    The old formats (Old Binary, Portable ASCII) set `dev` and `rdev`; the new
    ones (New ASCII, New CRC) set the major/minor pairs instead. The other
    representation is always None.
    """
    name: str
    file: memoryview
    mode: Mode
    ino: int
    uid: int
    gid: int
    nlink: int
    mtime: int
    dev: Optional[int] = None
    devmajor: Optional[int] = None
    devminor: Optional[int] = None
    rdev: Optional[int] = None
    rdevmajor: Optional[int] = None
    rdevminor: Optional[int] = None

    @property
    def size(self) -> int:
        return len(self.file)

    @property
    def file_type(self) -> Mode:
        return self.mode.file_type()

    @property
    def permissions(self) -> Mode:
        return self.mode.permissions()

    def is_dir(self) -> bool:
        return self.file_type == Mode.DIRECTORY

    def is_file(self) -> bool:
        return self.file_type == Mode.REGULAR_FILE

    def is_symlink(self) -> bool:
        return self.file_type == Mode.SYMBOLIC_LINK

    def is_fifo(self) -> bool:
        return self.file_type == Mode.NAMED_PIPE_FIFO

    def is_socket(self) -> bool:
        return self.file_type == Mode.SOCKET

    def is_char_device(self) -> bool:
        return self.file_type == Mode.CHARACTER_SPECIAL_DEVICE

    def is_block_device(self) -> bool:
        return self.file_type == Mode.BLOCK_SPECIAL_DEVICE

    def symlink_target(self) -> Optional[str]:
        """Return the link target, or None if this is not a symlink."""
        if not self.is_symlink():
            return None
        return str(self.file, "utf-8", errors="replace")

    def read(self) -> bytes:
        """Return a copy of the content."""
        return self.file.tobytes()
