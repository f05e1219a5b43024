"""
Domain Module

Contracts, events and errors; no I/O lives here.
"""

from .errors import StowageError

__all__ = ["StowageError"]
