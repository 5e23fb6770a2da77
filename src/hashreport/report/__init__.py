"""Report module for orphan and duplicate reporting.

This package contains:
- path: Report file naming derived from the run timestamp
- writer: ReportWriter, which partitions an aggregate into the orphans and duplicates reports
"""
