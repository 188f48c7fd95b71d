"""Event primitives raised by aggregates and stored in the outbox."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Union
from uuid import UUID, uuid4

AggregateId = Union[int, str, UUID]


@dataclass(frozen=True)
class DomainEvent:
    """Immutable fact about one aggregate; ``event_name`` is the outbox ``event_type``."""

    aggregate_id: AggregateId
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_name: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_name", self.__class__.__name__)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe representation stored in the outbox."""
        data = asdict(self)
        data["aggregate_id"] = str(self.aggregate_id)
        data["event_id"] = str(self.event_id)
        data["occurred_on"] = self.occurred_on.isoformat()
        return data

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> DomainEvent:
        """Rebuild an event previously serialised with ``to_payload``."""
        return cls(
            aggregate_id=payload["aggregate_id"],
            event_id=UUID(payload["event_id"]),
            occurred_on=datetime.fromisoformat(payload["occurred_on"]),
        )


class DomainEventMixin:
    """Collects events on a model instance until its repository saves them."""

    _domain_events: list[DomainEvent]

    def add_domain_event(self, event: DomainEvent) -> None:
        if not hasattr(self, "_domain_events"):
            self._domain_events = []
        self._domain_events.append(event)

    def clear_domain_events(self) -> None:
        if hasattr(self, "_domain_events"):
            self._domain_events.clear()

    @property
    def domain_events(self) -> list[DomainEvent]:
        if not hasattr(self, "_domain_events"):
            self._domain_events = []
        return list(self._domain_events)
