"""Generate C++ config loader classes from XML config tables."""

__version__ = "0.1.0"