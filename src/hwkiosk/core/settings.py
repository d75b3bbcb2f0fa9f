"""Centralized kiosk configuration using Pydantic Settings (v2).

This module exposes a cached `Settings` instance, via `load_settings()`, that reads from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local, .env.dev/.env.test/.env.prod

List-valued options (mirror roots, SMART device prefixes) are given as JSON
arrays in the environment, e.g. ``HWKIOSK_MIRROR_ROOTS='["/media"]'``.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed kiosk configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `HWKIOSK_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    export_dir : Path
        Primary directory for exported result files.
    mirror_roots : list[Path]
        Removable-media mount roots scanned for a mirror copy, in order.
    kiosk_mode : bool
        Written into every export as the `bootableVersion` marker.
    stress_seconds / memtest_size : defaults for the CPU and memory actions.
    smart_prefixes : list[str]
        Block device name prefixes included in the SMART sweep.
    host / port : bind address for the HTTP API.
    """

    environment: EnvName = Field(default="dev", alias="HWKIOSK_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")

    export_dir: Path = Field(default=Path("/tmp"), alias="HWKIOSK_EXPORT_DIR")
    mirror_roots: list[Path] = Field(
        default_factory=lambda: [Path("/media"), Path("/mnt"), Path("/run/media")],
        alias="HWKIOSK_MIRROR_ROOTS",
    )
    kiosk_mode: bool = Field(default=True, alias="HWKIOSK_KIOSK_MODE")

    stress_seconds: int = Field(default=30, ge=1, alias="HWKIOSK_STRESS_SECONDS")
    memtest_size: str = Field(default="100M", alias="HWKIOSK_MEMTEST_SIZE")
    smart_prefixes: list[str] = Field(
        default_factory=lambda: ["sd", "nvme"], alias="HWKIOSK_SMART_PREFIXES"
    )

    host: str = Field(default="127.0.0.1", alias="HWKIOSK_HOST")
    port: int = Field(default=8765, alias="HWKIOSK_PORT")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("HWKIOSK_ENV", "dev")
    return Settings()



def get_logger(name: str = "hwkiosk") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
