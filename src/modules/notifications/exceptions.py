"""Delivery failures of best-effort side effects.

Raised by the mail sender and the notification sink.  Callers in the
order workflow log them and carry on: the primary operation has already
committed.
"""

from __future__ import annotations


class MailDeliveryError(Exception):
    """The SMTP transport rejected or failed to deliver a message."""


class NotificationDeliveryError(Exception):
    """The broadcast channel could not accept a notification event."""
