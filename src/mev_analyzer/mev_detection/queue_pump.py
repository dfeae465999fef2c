"""
Queue Pump for sandwich opportunity detection.

Drains the analyze queue one message at a time, classifies each decoded
notification and forwards the original payload to the buy queue when it looks
like a sandwich opportunity. A failure on one message never stops the loop;
only ``stop()`` or task cancellation does.
"""
import asyncio
import logging
from enum import Enum
from typing import Callable, Optional, Union

import redis.asyncio as redis
from redis.exceptions import RedisError

from .notification_decoder import RawMessage, decode_notification
from .notification_models import ActionMatchMode, WatchedTokenSet
from .sandwich_classifier import is_sandwich_opportunity

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (RedisError, OSError)

MAX_LOGGED_MESSAGE_CHARS = 1000


class PumpState(str, Enum):
    """Lifecycle states of the queue pump."""
    IDLE = "idle"
    POLLING = "polling"
    EMPTY = "empty"
    PROCESSING = "processing"
    STOPPED = "stopped"


def describe_message(raw: RawMessage) -> str:
    """Render a raw payload for log output."""
    if isinstance(raw, (bytes, bytearray)):
        text = bytes(raw).decode("utf-8", errors="replace")
    else:
        text = str(raw)

    if len(text) > MAX_LOGGED_MESSAGE_CHARS:
        return f"{text[:MAX_LOGGED_MESSAGE_CHARS]}... ({len(text)} chars)"
    return text


class QueuePump:
    """
    Consume-classify-forward loop over two Redis lists.

    Messages are taken with a blocking BRPOP bounded by ``pop_timeout_seconds``
    and forwarded with LPUSH, so both queues behave as FIFOs for producers
    that LPUSH. The pump keeps no per-message state between iterations.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        input_queue: str,
        output_queue: str,
        watched_tokens: WatchedTokenSet,
        *,
        action_mode: ActionMatchMode = ActionMatchMode.SWAP,
        pop_timeout_seconds: Union[int, float] = 1.0,
        token_loader: Optional[Callable[[], WatchedTokenSet]] = None,
        dead_letter_queue: Optional[str] = None,
        reconnect_attempts: int = 5,
        reconnect_delay_seconds: float = 1.0
    ):
        """Initialize the pump with its Redis client and queue names."""
        self.redis = redis_client
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.watched_tokens = watched_tokens
        self.action_mode = action_mode
        self.pop_timeout_seconds = pop_timeout_seconds
        self.token_loader = token_loader
        self.dead_letter_queue = dead_letter_queue
        self.reconnect_attempts = reconnect_attempts
        self.reconnect_delay_seconds = reconnect_delay_seconds

        self.state = PumpState.IDLE
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self.state not in (PumpState.IDLE, PumpState.STOPPED)

    def stop(self):
        """Ask the loop to finish its current iteration and exit."""
        if not self._stop_event.is_set():
            logger.info("Stop requested for queue pump")
        self._stop_event.set()

    async def run(self):
        """Run the poll loop until stopped or cancelled."""
        if self.is_running:
            logger.warning("Queue pump already running")
            return

        logger.info(
            f"Starting Solana MEV analyzer: {self.input_queue} -> {self.output_queue} "
            f"({len(self.watched_tokens)} watched tokens, mode={self.action_mode.value})"
        )
        self.state = PumpState.POLLING

        try:
            while not self._stop_event.is_set():
                await self.run_iteration()
        except asyncio.CancelledError:
            logger.info("Queue pump cancelled")
            raise
        finally:
            self.state = PumpState.STOPPED
            logger.info("Queue pump stopped")

    async def run_iteration(self):
        """Poll once and process the popped message, if any."""
        self.state = PumpState.POLLING

        if self.token_loader is not None:
            self._reload_tokens()

        try:
            raw = await self._pop()
        except TRANSPORT_ERRORS as e:
            logger.error(f"Error popping from Redis queue {self.input_queue}: {e}", exc_info=True)
            await self._reconnect()
            return
        except Exception as e:
            logger.error(f"Unexpected error popping from Redis queue {self.input_queue}: {e}", exc_info=True)
            await self._wait_for_stop(self.reconnect_delay_seconds)
            return

        if raw is None:
            self.state = PumpState.EMPTY
            logger.debug(f"No messages in Redis queue {self.input_queue}")
            return

        self.state = PumpState.PROCESSING
        try:
            await self.process_message(raw)
        except Exception as e:
            logger.error(
                f"Error processing message from Redis queue: {describe_message(raw)}, {e}",
                exc_info=True
            )

    async def process_message(self, raw: RawMessage) -> bool:
        """
        Decode and classify one message, forwarding it on a match.

        Returns True when the message was pushed to the output queue. Errors
        from classification or the push propagate to the caller.
        """
        notification, ok = decode_notification(raw)
        if not ok:
            logger.warning(f"Dropping undecodable message from {self.input_queue}: {describe_message(raw)}")
            if self.dead_letter_queue:
                await self.redis.lpush(self.dead_letter_queue, raw)
                logger.info(f"Moved undecodable message to Redis queue: {self.dead_letter_queue}")
            return False

        logger.info(f"Received message from Redis queue: {describe_message(raw)}")

        if not is_sandwich_opportunity(notification, self.watched_tokens, self.action_mode):
            return False

        logger.info(
            f"Sandwich opportunity detected in transaction "
            f"{notification.signature or '<unknown>'} (slot {notification.slot}, "
            f"{'failed' if notification.failed else 'succeeded'})"
        )

        # Forward the exact payload that was classified
        await self.redis.lpush(self.output_queue, raw)
        logger.info(f"Pushed logsNotification to Redis queue: {self.output_queue}")
        return True

    async def _pop(self) -> Optional[RawMessage]:
        result = await self.redis.brpop([self.input_queue], timeout=self.pop_timeout_seconds)
        if result is None:
            return None

        _, raw = result
        return raw

    def _reload_tokens(self):
        try:
            tokens = self.token_loader()
        except Exception as e:
            logger.error(f"Failed to reload watched tokens, keeping previous set: {e}", exc_info=True)
            return

        if tokens != self.watched_tokens:
            logger.info(f"Watched tokens reloaded: {len(tokens)} tokens")
        self.watched_tokens = tokens

    async def _reconnect(self):
        """Ping Redis a bounded number of times after a transport error."""
        if self.reconnect_attempts <= 0:
            await self._wait_for_stop(self.reconnect_delay_seconds)
            return

        for attempt in range(1, self.reconnect_attempts + 1):
            if await self._wait_for_stop(self.reconnect_delay_seconds):
                return

            try:
                await self.redis.ping()
                logger.info(f"Redis connection restored after {attempt} attempt(s)")
                return
            except TRANSPORT_ERRORS as e:
                logger.warning(f"Redis reconnect attempt {attempt}/{self.reconnect_attempts} failed: {e}")
            except Exception as e:
                logger.error(
                    f"Unexpected error on Redis reconnect attempt {attempt}/{self.reconnect_attempts}: {e}",
                    exc_info=True
                )

        logger.error(
            f"Redis still unreachable after {self.reconnect_attempts} attempts; "
            f"retrying on next poll"
        )

    async def _wait_for_stop(self, timeout: float) -> bool:
        """Sleep up to ``timeout`` seconds; return True if stop was requested."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            pass
        return self._stop_event.is_set()
