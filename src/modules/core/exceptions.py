"""Cross-module exceptions shared by the service layer."""

from __future__ import annotations


class InvalidPageRequest(Exception):
    """``page`` and ``page_size`` must both be greater than zero."""
