"""Centralized configuration using Pydantic Settings

All environment variables are managed here.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import TICK_INTERVAL


class Settings(BaseSettings):
    """Bridge settings loaded from LOOP4R_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="LOOP4R_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Control-surface output
    device_out: str | None = None
    channel: int = Field(default=1, ge=0, le=16)  # 0 = all channels, advisory

    # Control protocol (ports are range-checked at connect time)
    osc_host: str = "127.0.0.1"
    osc_receive_port: int = 9001
    osc_send_port: int = 9000

    # Scheduler
    tick_interval: float = Field(default=TICK_INTERVAL, gt=0)
