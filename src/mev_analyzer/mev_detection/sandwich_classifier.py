"""
Sandwich opportunity classifier.

A heuristic over the human-readable log lines of a transaction: a notification
is flagged when some watched SPL token and some swap keyword both appear in its
logs. Matching is case-insensitive substring matching and the two hits need
not come from the same line.
"""
from typing import Iterable, Optional, Sequence

from .notification_models import ActionMatchMode, LogNotification, WatchedTokenSet


def _any_substring(needles: Iterable[str], folded_lines: Sequence[str]) -> bool:
    return any(needle in line for needle in needles for line in folded_lines)


def contains_watched_token(logs: Sequence[str], watched_tokens: WatchedTokenSet) -> bool:
    """Whether any watched token appears in any log line."""
    folded_lines = [line.casefold() for line in logs]
    return _any_substring(watched_tokens.folded, folded_lines)


def contains_action_keyword(
    logs: Sequence[str],
    mode: ActionMatchMode = ActionMatchMode.SWAP
) -> bool:
    """Whether any log line mentions one of the mode's action keywords."""
    folded_lines = [line.casefold() for line in logs]
    return _any_substring(mode.keywords, folded_lines)


def is_sandwich_opportunity(
    notification: Optional[LogNotification],
    watched_tokens: WatchedTokenSet,
    mode: ActionMatchMode = ActionMatchMode.SWAP
) -> bool:
    """Return True when the notification's logs hit both a watched token and an action keyword."""
    if notification is None or notification.logs is None:
        return False

    # An empty token set never matches
    if watched_tokens.is_empty():
        return False

    logs = notification.logs
    return contains_watched_token(logs, watched_tokens) and contains_action_keyword(logs, mode)
