"""Subscriber callback records and disposable subscriptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, NewType

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from hearken.session.manager import SessionManager

SubscriberId = NewType("SubscriberId", str)


def _ignore(*args) -> None:
    return None


class SubscriberCallbacks(BaseModel):
    """The notifications a subscriber receives. Unset callbacks are no-ops."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    on_listening_change: Callable[[bool], None] = _ignore
    on_transcript_change: Callable[[str, str], None] = _ignore
    on_clear_transcript: Callable[[], None] = _ignore
    on_microphone_availability_change: Callable[[bool], None] = _ignore
    on_capability_change: Callable[[bool, bool], None] = _ignore


class Subscription:
    """Handle returned by ``SessionManager.subscribe``.

    Closing it, or leaving its ``with`` block, unregisters the subscriber.
    Closing twice is harmless.
    """

    def __init__(self, session: SessionManager, subscriber_id: SubscriberId) -> None:
        self._session = session
        self._id = subscriber_id

    @property
    def id(self) -> SubscriberId:
        return self._id

    @property
    def active(self) -> bool:
        return self._session.is_subscribed(self._id)

    def close(self) -> None:
        self._session.unsubscribe(self._id)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
