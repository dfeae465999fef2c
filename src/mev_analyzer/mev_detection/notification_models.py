"""
Data models for Solana log notifications and watched tokens.

A ``LogNotification`` is the decoded projection of one raw queue message; a
``WatchedTokenSet`` is the immutable set of SPL token identifiers the
classifier looks for in the notification's log lines.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class ActionMatchMode(str, Enum):
    """Which action keywords count as a swap signal in the logs."""
    SWAP = "swap"
    SWAP_OR_BUY = "swap_or_buy"

    @property
    def keywords(self) -> Tuple[str, ...]:
        if self is ActionMatchMode.SWAP_OR_BUY:
            return ("swap", "buy")
        return ("swap",)


class NotificationDecodeError(ValueError):
    """Raised when a raw message is not a well-formed logs notification."""


@dataclass(frozen=True)
class LogNotification:
    """Decoded logsNotification envelope."""
    logs: Tuple[str, ...]

    # Envelope context, informational only
    signature: Optional[str] = None
    slot: Optional[int] = None
    err: Any = None
    subscription: Optional[int] = None

    @property
    def failed(self) -> bool:
        """Whether the transaction reported an execution error."""
        return self.err is not None


@dataclass(frozen=True)
class WatchedTokenSet:
    """Immutable, case-insensitive set of watched SPL token identifiers."""
    tokens: Tuple[str, ...] = ()
    _folded: Tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_folded", tuple(token.casefold() for token in self.tokens))

    @classmethod
    def parse(cls, value: Optional[str], delimiter: str = ",") -> "WatchedTokenSet":
        """Build a token set from a delimited string, skipping blank entries."""
        if not value:
            return cls()

        tokens = []
        seen = set()
        for raw_token in value.split(delimiter):
            token = raw_token.strip()
            if not token or token.casefold() in seen:
                continue
            seen.add(token.casefold())
            tokens.append(token)

        return cls(tuple(tokens))

    @property
    def folded(self) -> Tuple[str, ...]:
        return self._folded

    def is_empty(self) -> bool:
        return not self.tokens

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)
