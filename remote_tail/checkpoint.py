"""Checkpoint store: persists the tail offset so restarts resume where they left off."""

import logging
import os
import re

from remote_tail.errors import CheckpointWriteError, InvalidCheckpoint

logger = logging.getLogger(__name__)

_OFFSET_RE = re.compile(r"-?[0-9]+\n?")
MAX_OFFSET = 2**63 - 1


def load_offset(path: str | None) -> int:
    """Read the stored offset. Returns 0 when no checkpoint is configured or present."""
    if not path:
        return 0
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
    except FileNotFoundError:
        logger.info("No checkpoint at %s, starting from offset 0", path)
        return 0
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidCheckpoint(f"could not read checkpoint file {path}: {e}") from e

    if not _OFFSET_RE.fullmatch(data):
        raise InvalidCheckpoint(f"invalid checkpoint file {path}: {data[:40]!r}")

    try:
        offset = int(data)
    except ValueError as e:
        raise InvalidCheckpoint(f"invalid checkpoint file {path}: {e}") from e
    if offset < 0 or offset > MAX_OFFSET:
        raise InvalidCheckpoint(f"invalid offset in checkpoint file {path}: {data.strip()[:40]}")

    logger.info("Loaded checkpoint from %s (offset=%d)", path, offset)
    return offset


def save_offset(path: str | None, offset: int):
    """Atomic write: write to tmp file then replace. No-op without a path."""
    if not path:
        return
    tmp_path = path + ".tmp"
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(f"{offset}\n")
        os.replace(tmp_path, path)
    except OSError as e:
        raise CheckpointWriteError(f"could not write checkpoint file {path}: {e}") from e
