"""Catalog domain exceptions.

Raised by the Service Layer; the API layer (Views) translates them into
envelope responses.
"""

from __future__ import annotations


class BookNotFound(Exception):
    """The requested book does not exist."""


class NoBooksFound(Exception):
    """A listing or search produced an empty page."""
