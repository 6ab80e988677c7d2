"""Storage change events and the bus that carries them.

Every write to a storage area is announced as a :class:`StorageChangeEvent`
on the area's :class:`ChangeBus`. Sessions subscribe at open and
unsubscribe at close; the writing session receives its own events, so
"persist" and "notify local views" are the same step for every session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_logger = logging.getLogger(__name__)

ChangeHandler = Callable[["StorageChangeEvent"], None]


class StorageChangeEvent(BaseModel):
    """A completed write to one key of a storage area.

    ``key`` is ``None`` when the whole area was cleared.
    """

    model_config = ConfigDict(frozen=True)

    key: str | None
    old_value: str | None = None
    new_value: str | None = None
    source: str | None = Field(default=None, description="Session id of the writer")
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("occurred_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


@dataclass(slots=True)
class _Subscription:
    handler: ChangeHandler
    key: str | None

    def matches(self, event: StorageChangeEvent) -> bool:
        return self.key is None or event.key is None or event.key == self.key


class ChangeBus:
    """Synchronous publish/subscribe bus for one storage area."""

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []

    def subscribe(self, handler: ChangeHandler, *, key: str | None = None) -> Callable[[], None]:
        """Register *handler* and return a callable that unregisters it.

        With *key* set the handler only sees events for that key, plus
        area-clear events.
        """
        subscription = _Subscription(handler=handler, key=key)
        self._subscriptions.append(subscription)

        def _unsubscribe() -> None:
            try:
                self._subscriptions.remove(subscription)
            except ValueError:
                pass

        return _unsubscribe

    def publish(self, event: StorageChangeEvent) -> None:
        """Deliver *event* to every matching handler, in subscription order."""
        for subscription in list(self._subscriptions):
            if not subscription.matches(event):
                continue
            try:
                subscription.handler(event)
            except Exception:
                _logger.warning("Storage change handler failed key=%s", event.key, exc_info=True)

    def subscriber_count(self, key: str | None = None) -> int:
        if key is None:
            return len(self._subscriptions)
        return sum(1 for s in self._subscriptions if s.key == key)
