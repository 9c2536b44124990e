"""Check that every exported function is imported by at least one test file."""

__version__ = "0.3.0"
