"""SFTP reader that seeks to the stored offset and reads to end of file."""

import logging

import paramiko

from remote_tail.errors import TransportIO
from remote_tail.models import FetchResult, SftpTarget

logger = logging.getLogger(__name__)

_IO_ERRORS = (OSError, EOFError, paramiko.SSHException, paramiko.SFTPError)


class SftpReader:
    """Keeps one SSH/SFTP session open across polls.

    The session is opened lazily on the first fetch. Any failure closes it,
    and the next fetch connects again from scratch.
    """

    def __init__(self, target: SftpTarget, timeout: float = 5.0):
        self._target = target
        self._timeout = timeout
        self._ssh: paramiko.SSHClient | None = None
        self._sftp: paramiko.SFTPClient | None = None

    @property
    def connected(self) -> bool:
        return self._sftp is not None

    def connect(self):
        """Open the SSH connection and SFTP channel. Raises TransportIO on failure."""
        t = self._target
        ssh = paramiko.SSHClient()
        ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            ssh.connect(
                t.host,
                port=t.port,
                username=t.username,
                password=t.password,
                timeout=self._timeout,
                banner_timeout=self._timeout,
                auth_timeout=self._timeout,
                look_for_keys=False,
                allow_agent=False,
            )
            sftp = ssh.open_sftp()
            sftp.get_channel().settimeout(self._timeout)
        except _IO_ERRORS as e:
            ssh.close()
            raise TransportIO(f"failed to connect to {t.host}:{t.port}: {e!r}") from e

        self._ssh = ssh
        self._sftp = sftp
        logger.info("Connected to sftp://%s@%s:%d", t.username, t.host, t.port)

    def close(self):
        """Close the SFTP channel and SSH connection."""
        if self._sftp is not None:
            try:
                self._sftp.close()
            except _IO_ERRORS:
                pass
            self._sftp = None
        if self._ssh is not None:
            self._ssh.close()
            self._ssh = None

    def fetch(self, offset: int) -> FetchResult:
        if self._sftp is None:
            self.connect()

        path = self._target.path
        step = "open"
        try:
            with self._sftp.open(path, "rb") as f:
                step = "stat"
                size = f.stat().st_size
                if size < offset:
                    logger.debug("Remote size %d below offset %d", size, offset)
                    return FetchResult(truncated=True)
                if size == offset:
                    return FetchResult()

                step = "seek"
                f.seek(offset)
                step = "read"
                data = f.read()
        except _IO_ERRORS as e:
            self.close()
            raise TransportIO(f"failed to {step} {path} at offset {offset}: {e!r}") from e

        return FetchResult(data=data)
