import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    off_base_url: str = _get_env("OFF_BASE_URL", "https://world.openfoodfacts.org")
    off_user_agent: str = _get_env("OFF_USER_AGENT", "FoodProductExplorer/1.0 (+https://example.com)")
    upstream_retries: int = int(_get_env("UPSTREAM_RETRIES", "3"))
    upstream_retry_delay_ms: int = int(_get_env("UPSTREAM_RETRY_DELAY_MS", "1000"))
    upstream_timeout_seconds: float = float(_get_env("UPSTREAM_TIMEOUT_SECONDS", "10"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")
    log_json: bool = _get_env("LOG_JSON", "true").lower() in {"1", "true", "yes"}


settings = Settings()
