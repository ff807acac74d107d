"""Pitchside: football lineup placement engine."""

__version__ = "1.0.0"
