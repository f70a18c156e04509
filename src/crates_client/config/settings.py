from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://crates.io/api/v1/"


class AppConfig(BaseSettings):
    """Client configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRATES_CLIENT_ prefix.
    For example:
        - CRATES_CLIENT_USER_AGENT="my_crawler (help@my_crawler.com)"
        - CRATES_CLIENT_BASE_URL=https://staging.crates.io/api/v1/
        - CRATES_CLIENT_RATE_LIMIT_SECONDS=1.0

    Alternatively, settings can be provided programmatically:
        client = CratesClient(user_agent="my_crawler (github.com/me/my_crawler)")
    """

    model_config = SettingsConfigDict(
        env_prefix="CRATES_CLIENT_",
        case_sensitive=False,
        extra="forbid",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Root of the registry API. Endpoint paths are appended to it.",
    )

    user_agent: Optional[str] = Field(
        default=None,
        description="User-Agent header sent with every request. Required by the crates.io crawler policy, "
        "e.g. 'my_crawler (help@my_crawler.com)'",
    )

    rate_limit_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Minimum interval between two requests. One second is the smallest value crates.io tolerates",
    )

    poll_interval_seconds: float = Field(
        default=0.1,
        gt=0.0,
        description="Sleep between admission attempts while a blocking request waits for the rate limiter",
    )

    timeout_seconds: float = Field(
        default=20.0,
        gt=0.0,
        description="Network timeout applied by the HTTP transport",
    )
