"""
Runtime configuration for the Shoe Store API.

Settings are read from environment variables (a local ``.env`` file is
loaded first when present). Only a handful of values are configurable;
everything else about the service is fixed.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from dotenv import load_dotenv


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ConfigurationError(Exception):
    """Raised when a configuration value is present but invalid."""


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")
    return port


class Settings:
    """Application settings loaded from environment variables.

    Attributes
    ----------
    host : str
        Address uvicorn binds to (``HOST``).
    port : int
        Listen port (``PORT``), 3000 by default.
    log_level : str
        Root logging level name (``LOG_LEVEL``).
    cors_origins : List[str]
        Allowed CORS origins, parsed from the comma-separated
        ``CORS_ORIGINS`` variable.
    access_log : bool
        Whether every request is logged on the ``shoestore.access`` logger.
    """

    def __init__(self) -> None:
        load_dotenv()

        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = _parse_port(os.getenv("PORT", "3000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]
        self.access_log: bool = os.getenv("ACCESS_LOG", "true").lower() in ("true", "1", "yes")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings instance, creating it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_logging(level: str = "INFO") -> None:
    """Install the default handler and apply ``level`` to the root logger.

    ``basicConfig`` is a no-op once a handler exists (for example when the
    app is imported by the uvicorn CLI), so the level is set separately.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))
