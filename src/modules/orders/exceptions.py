"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
envelope responses:

- ``InvalidOrderRequest``  -> 400
- ``UserNotAuthenticated`` -> 401
- ``OrderNotFound``, ``UserProfileIncomplete`` -> 404
- ``InvalidOrderStatus``   -> 409
"""

from __future__ import annotations


class InvalidOrderRequest(Exception):
    """The order payload is malformed (empty items, invalid book id)."""


class UserNotAuthenticated(Exception):
    """No caller identity accompanies the request."""


class OrderNotFound(Exception):
    """The order does not exist, or is not visible to the caller.

    Ownership failures raise this same exception so callers cannot probe
    for the existence of other users' orders.
    """


class InvalidOrderStatus(Exception):
    """The status transition is not allowed from the current status."""


class UserProfileIncomplete(Exception):
    """The caller's account lacks the data needed to answer the request."""


class ClaimCodeExhausted(Exception):
    """No unused claim code could be generated."""
