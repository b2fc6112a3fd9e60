#!/usr/bin/env python3
"""Remote tail entry point."""

import logging
import signal
import sys
import threading

from remote_tail.config import load_config
from remote_tail.errors import ConfigError, InvalidCheckpoint
from remote_tail.reader import create_reader
from remote_tail.tailer import Tailer

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [remote-tail] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(argv)
        logging.getLogger().setLevel(config.log_level)
        reader = create_reader(config)
    except (ConfigError, ValueError) as e:
        logger.error("Failed to create tailer: %s", e)
        return 1

    shutdown_event = threading.Event()
    tailer = Tailer(
        reader,
        state_file=config.state_file,
        poll_interval=config.interval_sec,
        shutdown_event=shutdown_event,
    )

    try:
        tailer.load_state()
    except InvalidCheckpoint as e:
        logger.error("Failed to load state: %s", e)
        reader.close()
        return 1

    def signal_handler(signum, frame):
        logger.info("Received signal %d, saving state and exiting...", signum)
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    tailer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
