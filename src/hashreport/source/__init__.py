"""Readers for the hash listings fed into a report run.

This package contains:
- csv_report: InputRecord and the CSV report parser
"""
