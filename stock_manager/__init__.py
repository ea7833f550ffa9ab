"""Stock Manager - local-first inventory tracking service."""

__version__ = "0.1.0"
