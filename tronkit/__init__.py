"""TRON addresses, ABI encoding, account models, argument helpers, settings and a small command line."""

__version__ = "0.1.0"