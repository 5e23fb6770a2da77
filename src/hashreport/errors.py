"""Exceptions raised while building hash reports."""
from pathlib import Path


class HashReportError(Exception):
    """Base class for errors that abort a report run."""


class UsageError(HashReportError):
    """The command line did not name any input report."""


class MalformedInputError(HashReportError):
    """An input CSV report violates the CSV grammar or lacks the expected header.

    Attributes:
        source: Path of the offending input report
        line: Line number in the input where the problem was detected, or None when it applies to the whole file
    """

    def __init__(self, source: Path, message: str, line: int | None = None):
        self.source = source
        self.line = line
        location = f'{source}' if line is None else f'{source}, line {line}'
        super().__init__(f'{location}: {message}')


class OutputWriteError(HashReportError):
    """A report file could not be created or written."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f'{path}: {message}')
