"""Bulk summarizer for content discovered from configured sources."""

__version__ = "0.3.0"
