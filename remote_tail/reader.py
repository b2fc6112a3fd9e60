"""Transport reader interface and scheme-based reader selection."""

from typing import Protocol
from urllib.parse import urlsplit

from remote_tail.config import Config, parse_sftp_target
from remote_tail.errors import ConfigError
from remote_tail.http_reader import HttpReader
from remote_tail.models import FetchResult
from remote_tail.sftp_reader import SftpReader


class TransportReader(Protocol):
    def fetch(self, offset: int) -> FetchResult:
        """Fetch the remote file from ``offset`` (or earlier) to its end."""
        ...

    def close(self) -> None:
        ...


def create_reader(config: Config) -> TransportReader:
    """Build the reader matching the URL scheme in ``config``."""
    scheme = urlsplit(config.url).scheme.lower()

    if scheme in ("http", "https"):
        return HttpReader(config.url, timeout=config.request_timeout_sec)
    if scheme == "sftp":
        return SftpReader(parse_sftp_target(config.url), timeout=config.request_timeout_sec)

    raise ConfigError(f"invalid protocol: {scheme or '(none)'}")
