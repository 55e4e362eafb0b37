"""Brev: URL shortener with click metrics."""

__version__ = "1.0.0"
