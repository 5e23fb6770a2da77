"""Tests for report naming and writing.

| Test File       | Test Classes     | Tested Constructs              | Tested Functionalities                     |
|-----------------|------------------|--------------------------------|--------------------------------------------|
| test_path.py    | ReportPathTest   | get_*_path()                   | Report and log file naming                 |
| test_writer.py  | ReportWriterTest | ReportWriter.write()           | Partitioning, format, ordering, errors     |
"""
