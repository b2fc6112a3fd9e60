"""Tail loop: polls a transport reader and emits newly appended lines."""

import logging
import threading

from remote_tail.checkpoint import load_offset, save_offset
from remote_tail.errors import CheckpointWriteError, RemoteTailError
from remote_tail.extractor import extract_lines
from remote_tail.models import TailState
from remote_tail.reader import TransportReader

logger = logging.getLogger(__name__)


def _print_line(line: str):
    print(line, flush=True)


class Tailer:
    """Drives one reader: fetch, split into lines, emit, persist, sleep.

    Handles:
    - Transport and protocol errors (logged, same offset retried next poll)
    - Truncation/rotation (offset reset to 0 and persisted)
    - Partial trailing lines (left unconsumed until their newline arrives)
    """

    def __init__(
        self,
        reader: TransportReader,
        state_file: str = "",
        poll_interval: float = 15.0,
        shutdown_event: threading.Event | None = None,
        emit=None,
    ):
        self._reader = reader
        self._state_file = state_file
        self._poll_interval = poll_interval
        self._shutdown = shutdown_event or threading.Event()
        self._emit = emit or _print_line
        self._state = TailState()

    @property
    def offset(self) -> int:
        return self._state.offset

    def load_state(self):
        """Load the offset from the checkpoint file. Raises InvalidCheckpoint."""
        self._state.offset = load_offset(self._state_file)

    def save_state(self) -> bool:
        """Persist the current offset. Returns False if the write failed."""
        try:
            save_offset(self._state_file, self._state.offset)
        except CheckpointWriteError as e:
            logger.error("Failed to save state: %s", e)
            return False
        return True

    def poll_once(self) -> list[str]:
        """Run a single fetch/extract/emit/persist cycle and return the emitted lines."""
        offset = self._state.offset
        try:
            result = self._reader.fetch(offset)
            if result.truncated:
                logger.info("File truncated (offset was %d). Resetting state.", offset)
                self._state.offset = 0
                self.save_state()
                return []
            lines, new_offset = extract_lines(result.payload, offset)
        except RemoteTailError as e:
            logger.error("Error fetching file: %s", e)
            return []

        for line in lines:
            self._emit(line)
        self._state.offset = new_offset
        self.save_state()
        return lines

    def run(self):
        """Main polling loop. Blocks until shutdown_event is set."""
        logger.info("Tailing from offset %d every %ss", self._state.offset, self._poll_interval)
        try:
            while not self._shutdown.is_set():
                self.poll_once()
                self._shutdown.wait(self._poll_interval)
        finally:
            logger.info("Saving state at offset %d", self._state.offset)
            self.save_state()
            self._reader.close()
