"""SignScribe: gesture stream to committed text."""

__version__ = "0.1.0"
