"""Decoder for raw Solana ``logsNotification`` queue messages."""
import json
import logging
from typing import Any, Dict, Optional, Tuple, Union

from .notification_models import LogNotification, NotificationDecodeError

logger = logging.getLogger(__name__)

RawMessage = Union[bytes, bytearray, str]


def _require_object(container: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
    value = container.get(key)
    if not isinstance(value, dict):
        raise NotificationDecodeError(f"missing or invalid '{path}'")
    return value


def parse_notification(raw: RawMessage) -> LogNotification:
    """
    Parse a raw message into a LogNotification.

    The payload must be a JSON object containing ``params.result.value.logs``
    as a list of strings. Raises NotificationDecodeError otherwise.
    """
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise NotificationDecodeError(f"payload is not valid JSON: {e}") from e
    except RecursionError as e:
        raise NotificationDecodeError("payload is nested too deeply") from e

    if not isinstance(payload, dict):
        raise NotificationDecodeError("payload is not a JSON object")

    params = _require_object(payload, "params", "params")
    result = _require_object(params, "result", "params.result")
    value = _require_object(result, "value", "params.result.value")

    logs = value.get("logs")
    if not isinstance(logs, list):
        raise NotificationDecodeError("missing or invalid 'params.result.value.logs'")
    if not all(isinstance(line, str) for line in logs):
        raise NotificationDecodeError("'params.result.value.logs' must contain only strings")

    context = result.get("context")
    slot = context.get("slot") if isinstance(context, dict) else None
    signature = value.get("signature")
    subscription = params.get("subscription")

    return LogNotification(
        logs=tuple(logs),
        signature=signature if isinstance(signature, str) else None,
        slot=slot if isinstance(slot, int) else None,
        err=value.get("err"),
        subscription=subscription if isinstance(subscription, int) else None,
    )


def decode_notification(raw: RawMessage) -> Tuple[Optional[LogNotification], bool]:
    """Decode a raw message, returning ``(notification, ok)`` without raising."""
    try:
        return parse_notification(raw), True
    except NotificationDecodeError as e:
        logger.debug(f"Failed to decode notification: {e}")
        return None, False
