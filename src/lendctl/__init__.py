"""lendctl — timed-access loan registry."""

__version__ = "0.1.0"
