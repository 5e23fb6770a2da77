"""Tests for hash listing readers."""
