"""Application settings and configuration."""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from ..mev_detection.notification_models import ActionMatchMode


class Settings(BaseSettings):
    """Analyzer settings loaded from environment variables."""

    # Redis settings
    redis_url: Optional[str] = Field(
        default="redis://localhost:6379",
        description="Redis connection URL",
        alias="REDIS_URL"
    )

    analyze_queue: str = Field(
        default="solana_analyze_queue",
        description="Redis list holding incoming logsNotification messages",
        alias="ANALYZE_QUEUE"
    )

    buy_queue: str = Field(
        default="solana_buy_queue",
        description="Redis list receiving messages flagged as sandwich opportunities",
        alias="BUY_QUEUE"
    )

    dead_letter_queue: Optional[str] = Field(
        default=None,
        description="Optional Redis list for messages that could not be decoded",
        alias="DEAD_LETTER_QUEUE"
    )

    # Solana settings
    spl_token_address: str = Field(
        default="",
        description="Delimited list of SPL token addresses to watch",
        alias="SPL_TOKEN_ADDRESS"
    )

    token_delimiter: str = Field(
        default=",",
        description="Delimiter used to split SPL_TOKEN_ADDRESS",
        alias="TOKEN_DELIMITER"
    )

    hot_reload_tokens: bool = Field(
        default=False,
        description="Re-read SPL_TOKEN_ADDRESS before every poll",
        alias="HOT_RELOAD_TOKENS"
    )

    # Classifier settings
    action_match_mode: ActionMatchMode = Field(
        default=ActionMatchMode.SWAP,
        description="Action keywords required in the logs: 'swap' or 'swap_or_buy'",
        alias="ACTION_MATCH_MODE"
    )

    # Pump settings
    pop_timeout_seconds: float = Field(
        default=1.0,
        description="Blocking pop timeout in seconds",
        alias="POP_TIMEOUT_SECONDS",
        gt=0
    )

    reconnect_attempts: int = Field(
        default=5,
        description="PING attempts after a Redis transport error",
        alias="RECONNECT_ATTEMPTS",
        ge=0
    )

    reconnect_delay_seconds: float = Field(
        default=1.0,
        description="Delay between reconnect attempts in seconds",
        alias="RECONNECT_DELAY_SECONDS",
        ge=0
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
        alias="LOG_LEVEL"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"  # Ignore extra fields from .env
    }


# Global settings instance
settings = Settings()
