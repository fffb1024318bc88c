"""Multi-user notes backend: accounts, bearer tokens and per-user notes."""

__version__ = "1.0.0"
