"""Report path utilities for generating report and log file names."""

from pathlib import Path

ORPHANS_PREFIX = 'HASH-REPORT_ORPHANS__'
DUPLICATES_PREFIX = 'HASH-REPORT_DUPLICATES__'
REPORT_SUFFIX = '.tsv'
LOG_SUFFIX = '.log'


def get_orphans_report_path(output_dir: Path, timestamp: str) -> Path:
    """Generate the orphans report path for a run.

    Args:
        output_dir: Directory the report is written to
        timestamp: Run timestamp shared by every file of the run

    Returns:
        Path like output_dir/HASH-REPORT_ORPHANS__2024-05-01_13-45-09_+0200.tsv
    """
    return output_dir / f'{ORPHANS_PREFIX}{timestamp}{REPORT_SUFFIX}'


def get_duplicates_report_path(output_dir: Path, timestamp: str) -> Path:
    """Generate the duplicates report path for a run.

    Returns:
        Path like output_dir/HASH-REPORT_DUPLICATES__2024-05-01_13-45-09_+0200.tsv
    """
    return output_dir / f'{DUPLICATES_PREFIX}{timestamp}{REPORT_SUFFIX}'


def get_log_file_path(log_dir: Path, timestamp: str) -> Path:
    return log_dir / f'{timestamp}{LOG_SUFFIX}'
