"""Availability resolution and slot generation for a single-provider booking engine."""

__version__ = "0.1.0"
