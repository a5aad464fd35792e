"""Quiet Wires: a small interactive-fiction engine."""

__version__ = "0.1.0"
