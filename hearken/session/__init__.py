"""Recognition session lifecycle and subscriber fan-out."""

from hearken.session.manager import SessionManager
from hearken.session.subscriber import SubscriberCallbacks, SubscriberId, Subscription
from hearken.session.types import Capabilities, DisconnectKind, SessionState

__all__ = [
    "Capabilities",
    "DisconnectKind",
    "SessionManager",
    "SessionState",
    "SubscriberCallbacks",
    "SubscriberId",
    "Subscription",
]
