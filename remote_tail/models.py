"""Value types passed between the readers and the tail loop."""

from dataclasses import dataclass


@dataclass
class TailState:
    offset: int = 0      # byte position just past the last consumed line


@dataclass(frozen=True)
class FetchResult:
    """Raw bytes fetched from the remote file for one poll.

    The first ``skip_bytes`` bytes of ``data`` were already consumed in an
    earlier poll. ``truncated`` means the remote file shrank below the
    stored offset and the caller must start over from byte 0.
    """

    data: bytes = b""
    skip_bytes: int = 0
    truncated: bool = False

    @property
    def payload(self) -> bytes:
        """The fetched bytes with the already-consumed prefix removed."""
        if self.skip_bytes >= len(self.data):
            return b""
        return self.data[self.skip_bytes:]


@dataclass(frozen=True)
class SftpTarget:
    host: str
    username: str
    password: str
    path: str            # remote path as passed to SFTP open()
    port: int = 22
