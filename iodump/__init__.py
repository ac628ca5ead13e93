"""Wrap I/O handles, log their traffic in a readable format, and read such dumps back."""

__version__ = "0.1.0"
__all__ = ["dump", "timeshift"]