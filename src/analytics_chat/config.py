import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour default

    # Text generation (Google AI Studio)
    google_ai_api_key: str | None = os.getenv("GOOGLE_AI_API_KEY")
    gemini_model_name: str = os.getenv("GEMINI_MODEL_NAME", "gemini-pro")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    llm_timeout: float = float(os.getenv("LLM_TIMEOUT", "60"))

    # Supabase (PostgREST)
    supabase_url: str = os.getenv("SUPABASE_URL", "http://localhost:54321")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    supabase_timeout: float = float(os.getenv("SUPABASE_TIMEOUT", "30"))
    sql_procedure_name: str = os.getenv("SQL_PROCEDURE_NAME", "execute_sql")

    # Chat grounding
    chat_sample_table: str = os.getenv("CHAT_SAMPLE_TABLE", "order_summary")
    chat_sample_limit: int = int(os.getenv("CHAT_SAMPLE_LIMIT", "10"))
    history_limit: int = int(os.getenv("HISTORY_LIMIT", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if not 1 <= self.chat_sample_limit <= 100:
            raise ValueError(
                f"CHAT_SAMPLE_LIMIT must be between 1 and 100, got {self.chat_sample_limit}"
            )

        if self.history_limit < 0:
            raise ValueError("HISTORY_LIMIT must not be negative")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance.

    Responses are decoded to ``str`` because every cached value is JSON text.
    """
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
