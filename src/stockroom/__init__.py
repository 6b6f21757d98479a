"""Stockroom — product catalogue and order placement over a document store."""

__version__ = "0.1.0"
