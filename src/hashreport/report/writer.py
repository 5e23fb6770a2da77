"""Writer for the orphans and duplicates reports.

Both reports are tab separated with the header ``HASH\\tPATH\\tBYTES`` and one row per
occurrence. Rows always end with a single line feed, whatever the platform.
"""
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import NamedTuple, TextIO

from .path import get_orphans_report_path, get_duplicates_report_path
from ..aggregate import HashAggregate, HashGroup
from ..errors import OutputWriteError

logger = logging.getLogger(__name__)

REPORT_HEADERS = ('HASH', 'PATH', 'BYTES')
FIELD_SEPARATOR = '\t'
ROW_TERMINATOR = '\n'


class ReportSummary(NamedTuple):
    """Outcome of writing the reports of one run."""
    orphans_path: Path
    duplicates_path: Path
    orphan_count: int  # Rows in the orphans report
    duplicate_set_count: int  # Hashes seen two or more times
    duplicate_occurrence_count: int  # Rows in the duplicates report


class ReportWriter:
    """Partitions a HashAggregate into the orphans and duplicates reports.

    A group with a single occurrence goes to the orphans report; a group with two or more
    occurrences goes to the duplicates report with one row per occurrence. A group is
    never split between the two reports.

    Report files are always created fresh. If a file with the same name already exists
    the run fails rather than overwriting or appending to it.
    """

    def __init__(self, output_dir: Path, timestamp: str):
        """
        Args:
            output_dir: Directory both reports are created in
            timestamp: Run timestamp embedded in both report names
        """
        self._orphans_path = get_orphans_report_path(output_dir, timestamp)
        self._duplicates_path = get_duplicates_report_path(output_dir, timestamp)

    @property
    def orphans_path(self) -> Path:
        return self._orphans_path

    @property
    def duplicates_path(self) -> Path:
        return self._duplicates_path

    def write(self, aggregate: HashAggregate, sort_hashes: bool = False) -> ReportSummary:
        """Write both reports in a single pass over aggregate.

        Args:
            aggregate: Fully built aggregate of the run
            sort_hashes: Emit hashes in lexicographic order instead of first-seen order

        Returns:
            ReportSummary with the report paths and row counts

        Raises:
            OutputWriteError: Either report cannot be created or written. Data already
                written to the other report is left in place.
        """
        orphan_count = 0
        duplicate_set_count = 0
        duplicate_occurrence_count = 0

        with ExitStack() as stack:
            orphans = stack.enter_context(self._open(self._orphans_path))
            duplicates = stack.enter_context(self._open(self._duplicates_path))

            for path, stream in ((self._orphans_path, orphans), (self._duplicates_path, duplicates)):
                self._write_row(path, stream, REPORT_HEADERS)

            for group in aggregate.groups(sort_hashes):
                if group.is_duplicate():
                    self._write_group(self._duplicates_path, duplicates, group)
                    duplicate_set_count += 1
                    duplicate_occurrence_count += len(group)
                else:
                    logger.debug(f"Recording orphan {group.hash} {group.occurrences[0]}")
                    self._write_group(self._orphans_path, orphans, group)
                    orphan_count += 1

        return ReportSummary(
            self._orphans_path,
            self._duplicates_path,
            orphan_count,
            duplicate_set_count,
            duplicate_occurrence_count)

    @staticmethod
    def _open(path: Path) -> TextIO:
        try:
            return open(path, 'x', encoding='utf-8', newline='')
        except OSError as e:
            raise OutputWriteError(path, f'cannot create report: {e}') from e

    def _write_group(self, path: Path, stream: TextIO, group: HashGroup):
        for occurrence in group:
            self._write_row(path, stream, (group.hash, occurrence.path, occurrence.size_bytes))

    @staticmethod
    def _write_row(path: Path, stream: TextIO, fields: tuple[str, ...]):
        try:
            stream.write(FIELD_SEPARATOR.join(fields) + ROW_TERMINATOR)
        except OSError as e:
            raise OutputWriteError(path, f'cannot write report: {e}') from e
