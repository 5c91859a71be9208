"""variantctl — catalog variant resolution engine and CLI."""

__version__ = "0.1.0"
