"""Models, authorization and service adapters for a recruitment API."""

__version__ = "0.1.0"