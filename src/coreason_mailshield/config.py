# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for Mailshield.
    Uses environment variables with MAILSHIELD_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAILSHIELD_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Mapping cache. 21600s is the longest expiry the host user cache accepts.
    cache_ttl_seconds: int = Field(default=21600, gt=0)
    cache_max_size: int = Field(default=10000, gt=0)
    cache_key_prefix: str = "redaction_"

    # Logging
    log_level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[str] = None

    # HTTP service
    server_require_conversation_id: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            return v.upper()
        return v


settings = Settings()
