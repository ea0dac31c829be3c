"""Ringside: roster, championship and match bookkeeping."""

__version__ = "0.1.0"
