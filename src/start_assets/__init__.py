"""Configuration asset management for the start agent launcher."""

__version__ = "0.4.0"
