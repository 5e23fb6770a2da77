import logging
from pathlib import Path
from typing import Iterable

from .aggregate import HashAggregate
from .report.writer import ReportWriter, ReportSummary
from .source.csv_report import read_csv_report

logger = logging.getLogger(__name__)


class HashComparison:
    """Workflow for one report run: ingest hash listings, then write the reports.

    A HashComparison owns the HashAggregate of its run. Inputs are read one after another
    in the order given, each fully consumed and closed before the next is opened. The
    aggregate is then partitioned exactly once by generate_reports().

    Example:
        comparison = HashComparison()
        comparison.ingest([Path('/mnt/a.csv'), Path('/mnt/b.csv')])
        summary = comparison.generate_reports(Path.cwd(), format_timestamp())
    """

    def __init__(self, aggregate: HashAggregate | None = None):
        self._aggregate = aggregate if aggregate is not None else HashAggregate()
        self._reported = False

    @property
    def aggregate(self) -> HashAggregate:
        return self._aggregate

    def ingest(self, input_paths: Iterable[Path]) -> int:
        """Parse every input listing into the aggregate.

        Args:
            input_paths: CSV hash listings, processed in order

        Returns:
            Total number of records ingested

        Raises:
            OSError: An input cannot be opened or read
            MalformedInputError: An input is not a valid hash listing
        """
        if self._reported:
            raise RuntimeError("Reports have already been generated for this comparison")

        total = 0
        for input_path in input_paths:
            logger.info(f"Parsing {input_path}")
            count = self._aggregate.ingest(read_csv_report(input_path))
            logger.info(f"Done parsing {input_path} ({count} records)")
            total += count

        logger.info(f"Found {self._aggregate.hash_count} parsed hashes in {self._aggregate.occurrence_count} records")
        return total

    def generate_reports(self, output_dir: Path, timestamp: str, sort_hashes: bool = False) -> ReportSummary:
        """Write the orphans and duplicates reports for everything ingested so far.

        Args:
            output_dir: Directory for both reports
            timestamp: Run timestamp embedded in both report names
            sort_hashes: Emit hashes in lexicographic order

        Raises:
            OutputWriteError: A report cannot be created or written
        """
        if self._reported:
            raise RuntimeError("Reports have already been generated for this comparison")
        self._reported = True

        logger.info("Generating report files...")
        summary = ReportWriter(output_dir, timestamp).write(self._aggregate, sort_hashes)
        logger.info(f"Wrote {summary.orphan_count} orphans to {summary.orphans_path}")
        logger.info(
            f"Wrote {summary.duplicate_occurrence_count} duplicates in {summary.duplicate_set_count} sets to "
            f"{summary.duplicates_path}")
        logger.info("Creation of reports complete")
        return summary
