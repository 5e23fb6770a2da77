"""Shared test utilities for hashreport tests."""
from pathlib import Path

DEFAULT_HEADER = 'Size-bytes,Hash,File'


def write_listing(path: Path, rows: list[tuple[str, str, str]], header: str = DEFAULT_HEADER) -> Path:
    """Write a CSV hash listing with simple, unquoted rows."""
    lines = [header] + [','.join(row) for row in rows]
    path.write_text('\n'.join(lines) + '\n', encoding='utf-8', newline='')
    return path


def read_report(path: Path) -> list[list[str]]:
    """Read a TSV report as rows of fields, header included."""
    content = path.read_bytes().decode('utf-8')
    assert content.endswith('\n'), "Report must end with a line feed"
    return [line.split('\t') for line in content[:-1].split('\n')]
