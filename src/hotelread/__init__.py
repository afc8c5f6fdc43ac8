"""Read-only API over a registry of hotels and their documents."""

__version__ = "0.1.0"
