"""Tests for utility modules."""
