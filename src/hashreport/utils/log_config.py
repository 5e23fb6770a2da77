"""Logging configuration for a report run.

Records are handed to a queue on the calling thread and written to the console and the
run log by a background listener. LoggingConfig.shutdown() drains the queue, so it must
run on every exit path for the log to be complete.
"""
import logging
import logging.handlers
import queue
import sys
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


class LoggingConfig:
    """Console and file logging with an explicit start/shutdown lifecycle.

    Example:
        with LoggingConfig(Path('2024-05-01_13-45-09_+0200.log')) as log_config:
            ...  # every record of the run reaches the console and the log file
    """

    def __init__(
            self,
            log_path: Path | None,
            console_level: int | str = logging.INFO,
            file_level: int | str = logging.DEBUG):
        """
        Args:
            log_path: File receiving the run log, or None for console only
            console_level: Minimum level shown on the console
            file_level: Minimum level written to the log file
        """
        self._log_path = log_path
        self._console_level = _to_level(console_level)
        self._file_level = _to_level(file_level)
        self._queue_handler: logging.handlers.QueueHandler | None = None
        self._listener: logging.handlers.QueueListener | None = None
        self._handlers: list[logging.Handler] = []
        self._previous_root_level = logging.NOTSET

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    @property
    def started(self) -> bool:
        return self._listener is not None

    def start(self):
        """Install the queue handler on the root logger and start the listener."""
        if self.started:
            raise RuntimeError("Logging has already been started")

        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self._console_level)
        console_handler.setFormatter(formatter)
        self._handlers = [console_handler]

        file_error = None
        if self._log_path is not None:
            try:
                file_handler = logging.FileHandler(self._log_path, encoding='utf-8')
            except OSError as e:
                file_error = e
            else:
                file_handler.setLevel(self._file_level)
                file_handler.setFormatter(formatter)
                self._handlers.append(file_handler)

        log_queue: queue.SimpleQueue = queue.SimpleQueue()
        self._queue_handler = logging.handlers.QueueHandler(log_queue)
        self._listener = logging.handlers.QueueListener(log_queue, *self._handlers, respect_handler_level=True)

        root = logging.getLogger()
        self._previous_root_level = root.level
        root.setLevel(min(self._console_level, self._file_level))
        root.addHandler(self._queue_handler)
        self._listener.start()

        if file_error is not None:
            logger.error(f"Cannot log to {self._log_path}: {file_error}")
            self._log_path = None

    def shutdown(self):
        """Drain pending records, close every handler and restore the root logger.

        Safe to call more than once.
        """
        if not self.started:
            return

        root = logging.getLogger()
        root.removeHandler(self._queue_handler)
        root.setLevel(self._previous_root_level)

        self._listener.stop()
        for handler in self._handlers:
            handler.flush()
            handler.close()

        self._listener = None
        self._queue_handler = None
        self._handlers = []

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()


def _to_level(level: int | str) -> int:
    """Convert a level name such as 'INFO' to its numeric value."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level}")
    return value
