"""Contracts between aggregates that raise events and the code reacting to them."""

from __future__ import annotations

from typing import Generic, Optional, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    """Routes events by class.

    ``event_class_for`` maps the ``event_type`` column of an outbox row
    back to a subscribed class; ``None`` means nothing listens for it.
    """

    def publish(self, event: DomainEvent) -> None: ...

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...

    def event_class_for(self, event_name: str) -> Optional[Type[DomainEvent]]: ...
