"""Per-instrument trade, tick and spread statistics from market tick files."""

__version__ = "0.1.0"
