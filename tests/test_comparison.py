import tempfile
import unittest
from pathlib import Path

from hashreport import HashComparison, MalformedInputError

from .helpers import read_report, write_listing


class HashComparisonTest(unittest.TestCase):
    """End-to-end tests for HashComparison.ingest() and generate_reports()."""

    def test_two_sources(self):
        """A hash listed in two sources with different case becomes one duplicate set."""
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            source_a = write_listing(tmp / 'a.csv', [('100', 'AAA', '/x/1.txt'), ('200', 'BBB', '/x/2.txt')])
            source_b = write_listing(tmp / 'b.csv', [('100', 'aaa', '/y/1.txt')])

            comparison = HashComparison()
            self.assertEqual(3, comparison.ingest([source_a, source_b]))
            summary = comparison.generate_reports(tmp, 'run')

            self.assertEqual(
                [['HASH', 'PATH', 'BYTES'], ['aaa', '/x/1.txt', '100'], ['aaa', '/y/1.txt', '100']],
                read_report(summary.duplicates_path))
            self.assertEqual(
                [['HASH', 'PATH', 'BYTES'], ['bbb', '/x/2.txt', '200']],
                read_report(summary.orphans_path))

    def test_whitespace_and_case_insensitive_hash(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            source = write_listing(tmp / 'a.csv', [('1', 'ABC123', '/p/1'), ('2', ' abc123 ', '/p/2')])

            comparison = HashComparison()
            comparison.ingest([source])
            summary = comparison.generate_reports(tmp, 'run')

            self.assertEqual(0, summary.orphan_count)
            self.assertEqual(1, summary.duplicate_set_count)
            self.assertEqual(2, summary.duplicate_occurrence_count)

    def test_repeated_runs_produce_same_rows(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            rows = [(str(i), f'{i % 5:032x}', f'/data/{i}.bin') for i in range(23)] + [('9', 'f' * 32, '/lone')]
            source = write_listing(tmp / 'a.csv', rows)

            outputs = []
            for timestamp in ('first', 'second'):
                comparison = HashComparison()
                comparison.ingest([source])
                summary = comparison.generate_reports(tmp, timestamp, sort_hashes=True)
                outputs.append((summary.orphans_path.read_bytes(), summary.duplicates_path.read_bytes()))

            self.assertEqual(outputs[0], outputs[1])
            orphans = read_report(tmp / 'HASH-REPORT_ORPHANS__first.tsv')
            duplicates = read_report(tmp / 'HASH-REPORT_DUPLICATES__first.tsv')
            self.assertEqual(len(rows), len(orphans) - 1 + len(duplicates) - 1)

    def test_malformed_source_aborts_before_reports(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp = Path(tmpdir)
            good = write_listing(tmp / 'good.csv', [('1', 'aaa', '/a')])
            bad = write_listing(tmp / 'bad.csv', [('1', 'aaa', '/b')], header='Size,Hash,File')

            comparison = HashComparison()
            with self.assertRaises(MalformedInputError) as cm:
                comparison.ingest([good, bad])

            self.assertEqual(bad, cm.exception.source)
            self.assertEqual([], list(tmp.glob('*.tsv')))

    def test_missing_source(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(FileNotFoundError):
                HashComparison().ingest([Path(tmpdir) / 'missing.csv'])

    def test_reports_generated_once(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            comparison = HashComparison()
            comparison.generate_reports(Path(tmpdir), 'run')

            with self.assertRaises(RuntimeError):
                comparison.generate_reports(Path(tmpdir), 'again')
            with self.assertRaises(RuntimeError):
                comparison.ingest([])


if __name__ == '__main__':
    unittest.main()
