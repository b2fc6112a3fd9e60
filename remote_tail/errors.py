"""Exception hierarchy shared by the tailer, readers, and startup code."""


class RemoteTailError(Exception):
    """Base class for every error raised by remote_tail."""


class ConfigError(RemoteTailError):
    """Bad URL, unsupported scheme, or missing credential. Fatal at startup."""


class InvalidCheckpoint(RemoteTailError):
    """The persisted offset could not be read or is not a non-negative integer."""


class CheckpointWriteError(RemoteTailError):
    """The offset could not be written to the checkpoint file."""


class TransportIO(RemoteTailError):
    """Connection, request, or timeout failure talking to the remote host."""


class UnexpectedStatus(RemoteTailError):
    """The HTTP server answered with a status the reader does not handle."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"unexpected HTTP status: {status_code} {reason}".rstrip())


class UnexpectedPartialContent(RemoteTailError):
    """The server sent 206 for a request that carried no Range header."""
