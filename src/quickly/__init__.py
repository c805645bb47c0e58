"""Run one shell command across many directories at once."""

__version__ = "0.1.0"

__all__ = ["__version__"]
