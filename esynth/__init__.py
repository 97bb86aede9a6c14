"""Bloom filters, edge bookkeeping, timed string sets, zlib compression, option parsing and batch runs for molecule synthesis."""

__version__ = "0.1.0"