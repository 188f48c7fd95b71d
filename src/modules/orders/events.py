"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is placed."""


@dataclass(frozen=True)
class OrderCancelled(DomainEvent):
    """Raised when the owner cancels a pending order."""


@dataclass(frozen=True)
class OrderCompleted(DomainEvent):
    """Raised when an order is collected with its claim code."""
