import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hashreport.utils.profiling import get_profile_dir, generate_profile_filename, profile_main


class ProfilingTest(unittest.TestCase):
    def setUp(self):
        """Clear HASHREPORT_PROFILE for the duration of each test."""
        patcher = mock.patch.dict(os.environ)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop('HASHREPORT_PROFILE', None)

    def test_get_profile_dir_when_not_set(self):
        self.assertIsNone(get_profile_dir())

    def test_get_profile_dir_when_set(self):
        os.environ['HASHREPORT_PROFILE'] = '/tmp/test_profile'
        self.assertEqual(Path('/tmp/test_profile'), get_profile_dir())

    def test_generate_profile_filename_is_unique(self):
        first = generate_profile_filename('main')
        second = generate_profile_filename('main')

        self.assertNotEqual(first, second)
        self.assertTrue(first.startswith(f'main_{os.getpid()}_'))
        self.assertTrue(first.endswith('.prof'))

    def test_profile_main_without_env(self):
        @profile_main
        def entry(value):
            return value * 2

        self.assertEqual(42, entry(21))

    def test_profile_main_writes_stats(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            os.environ['HASHREPORT_PROFILE'] = str(Path(tmpdir) / 'profiles')

            @profile_main
            def entry():
                return sum(range(100))

            self.assertEqual(4950, entry())
            profiles = list((Path(tmpdir) / 'profiles').glob('main_*.prof'))
            self.assertEqual(1, len(profiles))

    def test_profile_main_writes_stats_on_exception(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            os.environ['HASHREPORT_PROFILE'] = tmpdir

            @profile_main
            def entry():
                raise ValueError('boom')

            with self.assertRaises(ValueError):
                entry()
            self.assertEqual(1, len(list(Path(tmpdir).glob('*.prof'))))


if __name__ == '__main__':
    unittest.main()
