"""Tablebook - restaurant reservation intake and store."""

__version__ = "0.1.0"
