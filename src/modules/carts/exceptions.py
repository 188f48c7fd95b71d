"""Cart domain exceptions."""

from __future__ import annotations


class CartEntryNotFound(Exception):
    """The caller's cart has no entry for the requested book."""


class CartBookNotFound(Exception):
    """The book being added to the cart does not exist in the catalog."""
