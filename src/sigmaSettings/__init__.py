"""Versioned user settings with a stable-identity home banner media catalog."""

__version__ = "0.3.0"
