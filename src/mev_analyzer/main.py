"""Service entry point for the Solana MEV analyzer."""
import asyncio
import logging
import signal
import sys

from mev_analyzer.cache import close_redis, get_redis
from mev_analyzer.config.settings import Settings, settings
from mev_analyzer.mev_detection import QueuePump, WatchedTokenSet

logger = logging.getLogger(__name__)


def load_watched_tokens() -> WatchedTokenSet:
    """Read a fresh settings snapshot and build the watched token set from it."""
    snapshot = Settings()
    return WatchedTokenSet.parse(snapshot.spl_token_address, snapshot.token_delimiter)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def build_pump() -> QueuePump:
    """Create the queue pump from the global settings."""
    redis_client = await get_redis()

    watched_tokens = WatchedTokenSet.parse(settings.spl_token_address, settings.token_delimiter)
    if watched_tokens.is_empty():
        logger.warning("⚠️  SPL_TOKEN_ADDRESS is empty - no message will be flagged")

    return QueuePump(
        redis_client,
        input_queue=settings.analyze_queue,
        output_queue=settings.buy_queue,
        watched_tokens=watched_tokens,
        action_mode=settings.action_match_mode,
        pop_timeout_seconds=settings.pop_timeout_seconds,
        token_loader=load_watched_tokens if settings.hot_reload_tokens else None,
        dead_letter_queue=settings.dead_letter_queue,
        reconnect_attempts=settings.reconnect_attempts,
        reconnect_delay_seconds=settings.reconnect_delay_seconds,
    )


async def run_service() -> None:
    """Run the analyzer until SIGINT or SIGTERM."""
    logger.info("🚀 Starting Solana MEV Bot Analyzer...")

    try:
        pump = await build_pump()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, pump.stop)

        await pump.run()
    finally:
        await close_redis()
        logger.info("✅ Solana MEV Bot Analyzer shutdown complete")


def main() -> int:
    """Console script entry point."""
    configure_logging(settings.log_level)

    try:
        asyncio.run(run_service())
    except KeyboardInterrupt:
        logger.info("🛑 Shutdown requested by user")
    except Exception as e:
        logger.error(f"❌ Service error: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
