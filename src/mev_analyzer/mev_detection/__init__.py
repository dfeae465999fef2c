"""
MEV Opportunity Detection Module.

This module decodes Solana log notifications taken from the analyze queue,
flags sandwich opportunities and forwards them to the buy queue.
"""
from .notification_models import (
    ActionMatchMode,
    LogNotification,
    NotificationDecodeError,
    WatchedTokenSet
)
from .notification_decoder import (
    decode_notification,
    parse_notification
)
from .sandwich_classifier import (
    contains_action_keyword,
    contains_watched_token,
    is_sandwich_opportunity
)
from .queue_pump import (
    PumpState,
    QueuePump
)

__all__ = [
    # Models
    "ActionMatchMode",
    "LogNotification",
    "NotificationDecodeError",
    "WatchedTokenSet",

    # Decoding
    "decode_notification",
    "parse_notification",

    # Classification
    "contains_action_keyword",
    "contains_watched_token",
    "is_sandwich_opportunity",

    # Queue Pump
    "PumpState",
    "QueuePump"
]
