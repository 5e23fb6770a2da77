"""Parser for CSV hash listings.

A hash listing is a comma separated file with the header ``Size-bytes,Hash,File``
and one row per hashed file. Quoted fields may contain commas and line breaks.
"""
import csv
import logging
from pathlib import Path
from typing import Iterator, NamedTuple, TextIO

from ..errors import MalformedInputError

logger = logging.getLogger(__name__)

SIZE_COLUMN = 'Size-bytes'
HASH_COLUMN = 'Hash'
FILE_COLUMN = 'File'

SOURCE_HEADERS = (SIZE_COLUMN, HASH_COLUMN, FILE_COLUMN)


class InputRecord(NamedTuple):
    """One row of a hash listing after normalization."""
    size_bytes: str  # Trimmed, otherwise opaque
    hash: str  # Trimmed and lowercased
    path: str  # Exactly as listed
    source: Path | None = None
    line: int | None = None


def normalize_hash(value: str) -> str:
    """Normalize a hash so that comparison ignores case and surrounding whitespace."""
    return value.strip().lower()


def read_csv_report(path: Path) -> Iterator[InputRecord]:
    """Yield the records of the CSV hash listing at path.

    The file is closed once the generator is exhausted, closed, or fails.

    Raises:
        OSError: The file cannot be opened or read
        MalformedInputError: The file is not a valid hash listing
    """
    with open(path, 'r', encoding='utf-8-sig', newline='') as stream:
        yield from parse_csv_report(stream, path)


def parse_csv_report(stream: TextIO, source: Path) -> Iterator[InputRecord]:
    """Yield the records of a CSV hash listing read from stream.

    Args:
        stream: Text stream opened with newline='' so quoted line breaks survive
        source: Path reported in log messages and errors

    Raises:
        MalformedInputError: A header other than Size-bytes,Hash,File, a row with the wrong
            number of fields (blank rows included), bytes that are not UTF-8, or any CSV
            grammar violation such as an unterminated quote
    """
    reader = csv.reader(stream, strict=True)

    try:
        header = next(reader, None)
    except (csv.Error, UnicodeDecodeError) as e:
        raise MalformedInputError(source, f'unreadable header: {e}', reader.line_num) from e

    if header is None:
        raise MalformedInputError(source, 'missing header row')

    _check_header(header, source)

    while True:
        try:
            row = next(reader, None)
        except (csv.Error, UnicodeDecodeError) as e:
            raise MalformedInputError(source, str(e), reader.line_num) from e

        if row is None:
            break

        if len(row) != len(SOURCE_HEADERS):
            raise MalformedInputError(
                source, f'expected {len(SOURCE_HEADERS)} fields, found {len(row)}', reader.line_num)

        record = InputRecord(
            row[0].strip(),
            normalize_hash(row[1]),
            row[2],
            source,
            reader.line_num)

        logger.debug(f"Parsed {record}")

        yield record


def _check_header(header: list[str], source: Path):
    """Require the header to be exactly Size-bytes,Hash,File, in that order."""
    if tuple(header) != SOURCE_HEADERS:
        raise MalformedInputError(
            source,
            f"header must be {','.join(SOURCE_HEADERS)}, found {','.join(header)}",
            1)
