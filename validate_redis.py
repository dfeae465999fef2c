#!/usr/bin/env python3
"""Quick validation script for the analyzer's Redis queues."""
import sys
import asyncio
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from mev_analyzer.cache import get_redis, close_redis
from mev_analyzer.config.settings import settings


async def check_queues():
    """Check the Redis connection and report queue depths."""
    print("🔍 Testing Redis connection...")

    try:
        redis_client = await get_redis()
        print("✅ Redis connection successful")

        queues = [settings.analyze_queue, settings.buy_queue]
        if settings.dead_letter_queue:
            queues.append(settings.dead_letter_queue)

        for queue in queues:
            key_type = (await redis_client.type(queue)).decode()
            if key_type not in ("list", "none"):
                print(f"❌ {queue} is a Redis {key_type}, expected a list")
                return False

            depth = await redis_client.llen(queue)
            print(f"✅ {queue}: {depth} message(s) waiting")

        print("✅ All queue checks passed!")
        return True

    except Exception as e:
        print(f"❌ Queue check failed: {e}")
        return False
    finally:
        await close_redis()

if __name__ == "__main__":
    success = asyncio.run(check_queues())
    if not success:
        sys.exit(1)
