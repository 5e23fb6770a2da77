import argparse
import logging
import os
import sys
import textwrap
from pathlib import Path
from typing import NamedTuple

from . import HashComparison, HashReportError, ReportSettings, UsageError
from .report.path import get_log_file_path
from .settings import (
    SETTING_OUTPUT_DIRECTORY,
    SETTING_SORT_HASHES,
    SETTING_LOG_DIRECTORY,
    SETTING_CONSOLE_LEVEL,
    SETTING_FILE_LEVEL,
)
from .utils.log_config import LoggingConfig
from .utils.profiling import profile_main
from .utils.timestamp import format_timestamp

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 255


class RunOptions(NamedTuple):
    """Options of one run after merging the command line over the settings file."""
    output_dir: Path
    log_dir: Path
    sort_hashes: bool
    console_level: str
    file_level: str


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hashreport',
        usage='%(prog)s [options] CSV_REPORT [CSV_REPORT ...]',
        description='Compare CSV hash listings (Size-bytes,Hash,File) and split the listed files into an orphans '
                    'report (hash seen once) and a duplicates report (hash seen more than once).',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent('''
            Examples:
              hashreport /mnt/disk1.csv
              hashreport --sort --output-dir reports /mnt/disk1.csv /mnt/disk2.csv

            Each run creates, named after the time the run started:
              HASH-REPORT_ORPHANS__<timestamp>.tsv
              HASH-REPORT_DUPLICATES__<timestamp>.tsv
              <timestamp>.log
            ''').strip())
    parser.add_argument(
        'paths',
        nargs='*',
        metavar='CSV_REPORT',
        help='CSV hash listings to compare, read in the order given')
    parser.add_argument(
        '--output-dir',
        metavar='PATH',
        help='Directory for the TSV reports. If not provided, uses output.directory from the settings file or the '
             'current directory.')
    parser.add_argument(
        '--log-dir',
        metavar='PATH',
        help='Directory for the run log. If not provided, uses logging.directory from the settings file or the '
             'current directory.')
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to INFO. The log file always '
             'receives every level unless logging.file_level says otherwise.')
    parser.add_argument(
        '--sort',
        action='store_true',
        help='Write hashes in lexicographic order so repeated runs produce identical reports')
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='TOML settings file. If not provided, uses HASHREPORT_CONFIG environment variable or hashreport.toml in '
             'the current directory when present.')
    return parser


def _resolve_input_paths(paths: list[str]) -> list[Path]:
    """Make every input path absolute without requiring it to exist yet."""
    if not paths:
        raise UsageError("Incorrect number of arguments: at least one CSV report is required")
    return [Path(p).absolute() for p in paths]


def _resolve_options(args: argparse.Namespace, settings: ReportSettings) -> RunOptions:
    """Merge command-line options over the settings file.

    Raises:
        ValueError: A setting holds a value of the wrong type
    """
    output_dir = args.output_dir or settings.get_typed(SETTING_OUTPUT_DIRECTORY, str, os.curdir)
    log_dir = args.log_dir or settings.get_typed(SETTING_LOG_DIRECTORY, str, os.curdir)
    sort_hashes = args.sort or settings.get_typed(SETTING_SORT_HASHES, bool, False)
    console_level = args.log_level or settings.get_typed(SETTING_CONSOLE_LEVEL, str, 'INFO')
    file_level = settings.get_typed(SETTING_FILE_LEVEL, str, 'DEBUG')
    return RunOptions(Path(output_dir).absolute(), Path(log_dir).absolute(), sort_hashes, console_level, file_level)


@profile_main
def hashreport_main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    # Options may appear between input paths
    args = parser.parse_intermixed_args(argv)

    try:
        input_paths = _resolve_input_paths(args.paths)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    # Shared by both report names and the log file name
    timestamp = format_timestamp()

    try:
        settings = ReportSettings.locate(args.config)
        options = _resolve_options(args, settings)
        log_config = LoggingConfig(
            get_log_file_path(options.log_dir, timestamp),
            console_level=options.console_level,
            file_level=options.file_level)
    except (OSError, ValueError) as e:
        print(f"Error: cannot load settings: {e}", file=sys.stderr)
        return EXIT_FAILURE

    log_config.start()
    try:
        if log_config.log_path is not None:
            print(f"Logging to {log_config.log_path}")
        return _run(settings, options, input_paths, timestamp)
    except (HashReportError, OSError):
        logger.exception("Report run failed")
        return EXIT_FAILURE
    except Exception:
        logger.exception("Report run failed unexpectedly")
        return EXIT_FAILURE
    finally:
        # Drains asynchronous logging so the log is complete on every exit path
        log_config.shutdown()


def _run(settings: ReportSettings, options: RunOptions, input_paths: list[Path], timestamp: str) -> int:
    logger.debug(f"Current working directory is: {os.getcwd()}")
    if settings.settings_file is not None:
        logger.info(f"Loaded settings from {settings.settings_file}")

    for i, input_path in enumerate(input_paths):
        logger.info(f"CSV report file #{i} path is {input_path}")

    comparison = HashComparison()
    comparison.ingest(input_paths)
    comparison.generate_reports(options.output_dir, timestamp, options.sort_hashes)

    logger.info("Program has completed")
    return EXIT_SUCCESS


if __name__ == '__main__':
    sys.exit(hashreport_main())
