# -*- coding: utf-8 -*-
import os

from typing import Optional, Tuple
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv


class Settings(BaseSettings):
    """Ceph Nano CLI Settings"""

    # Cluster identity
    CONTAINER_NAME_PREFIX: str = "ceph-nano-"
    IMAGE_NAME: str = "ceph/daemon:latest-nano"
    DEFAULT_WORK_DIR: str = "/usr/share/ceph-nano"

    # Gateway port allocation
    PORT_RANGE: Tuple[int, int] = (8000, 8100)
    PORT_PROBE_HOST: str = "0.0.0.0"
    PORT_PROBE_TIMEOUT: float = 1.0

    # Readiness polling
    READINESS_MARKER: str = "SUCCESS"
    INTERNAL_HEALTH_TIMEOUT: int = 60
    EXTERNAL_HEALTH_TIMEOUT: int = 30
    POLL_INTERVAL: float = 1.0
    GATEWAY_PROBE_TIMEOUT: float = 5.0
    GATEWAY_LOG_PATH: str = "/var/log/ceph/client.rgw.*.log"

    # In-container data
    USER_DETAILS_PATH: str = "/nano_user_details"
    S3_USER: str = "nano"

    # Engine
    ENGINE_TIMEOUT: Optional[int] = None

    ISSUE_TRACKER_URL: str = "https://github.com/ceph/cn"
    REGISTRY_TAGS_URL: str = (
        "https://registry.hub.docker.com/v2/repositories/ceph/daemon/tags/"
    )
    REGISTRY_PAGE_SIZE: int = 10

    model_config = SettingsConfigDict(
        env_prefix="CN_",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("PORT_RANGE")
    @classmethod
    def validate_port_range(cls, v):
        start, end = v
        if start < 1 or end > 65535 or start > end:
            raise ValueError(
                f"PORT_RANGE must be an ascending range within "
                f"1-65535, got {start}-{end}",
            )
        return v

    @field_validator(
        "INTERNAL_HEALTH_TIMEOUT",
        "EXTERNAL_HEALTH_TIMEOUT",
    )
    @classmethod
    def validate_ceiling(cls, v):
        if v < 1:
            raise ValueError("Poll ceilings must be at least 1")
        return v


_settings: Optional[Settings] = None


def get_settings(config_file: Optional[str] = None) -> Settings:
    global _settings

    env_file = ".env"

    if _settings is None:
        if config_file and os.path.exists(config_file):
            load_dotenv(config_file, override=True)
        elif os.path.exists(env_file):
            load_dotenv(env_file)
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call reloads them."""
    global _settings
    _settings = None
