"""artdeploy - Runtime settings"""

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional
from urllib.parse import urlparse

from dotenv import dotenv_values

from artdeploy.constants import (
    DEFAULT_COMPOSE_BIN,
    DEFAULT_COMPOSE_FILE,
    DEFAULT_COMPOSE_URL,
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_DRIVER_URL,
    DEFAULT_LOG_DIR,
    ENV_COMPOSE_BIN,
    ENV_COMPOSE_FILE,
    ENV_COMPOSE_URL,
    ENV_DOWNLOAD_TIMEOUT,
    ENV_DRIVER_URL,
    ENV_LOG_DIR,
    POSTGRESQL_JAR,
)
from artdeploy.exceptions import InvalidOptionError


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration."""

    compose_bin: str = DEFAULT_COMPOSE_BIN
    compose_file: Path = Path(DEFAULT_COMPOSE_FILE)
    compose_url: str = DEFAULT_COMPOSE_URL
    driver_url: str = DEFAULT_DRIVER_URL
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    download_timeout: int = DEFAULT_DOWNLOAD_TIMEOUT

    @property
    def compose_command(self) -> List[str]:
        """Compose binary split into argv words (supports 'docker compose')."""
        return shlex.split(self.compose_bin)

    @property
    def driver_jar(self) -> str:
        """File name of the database driver, taken from its URL."""
        name = Path(urlparse(self.driver_url).path).name
        return name or POSTGRESQL_JAR


def find_env_file() -> Optional[Path]:
    """Smart .env file detection"""
    search_paths = [
        Path.cwd() / ".env",
        Path.home() / ".artdeploy" / ".env",
    ]

    for path in search_paths:
        if path.exists():
            return path

    return None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from defaults, an optional .env file and the environment.

    Process environment wins over the .env file.
    """
    values: Dict[str, Optional[str]] = {}

    env_file = find_env_file()
    if env_file:
        values.update(dotenv_values(env_file))

    values.update(os.environ if environ is None else environ)

    timeout_raw = values.get(ENV_DOWNLOAD_TIMEOUT) or str(DEFAULT_DOWNLOAD_TIMEOUT)
    try:
        timeout = int(timeout_raw)
    except ValueError:
        raise InvalidOptionError(
            f"{ENV_DOWNLOAD_TIMEOUT} must be an integer",
            context=f"Got: {timeout_raw}",
        )

    return Settings(
        compose_bin=values.get(ENV_COMPOSE_BIN) or DEFAULT_COMPOSE_BIN,
        compose_file=Path(values.get(ENV_COMPOSE_FILE) or DEFAULT_COMPOSE_FILE),
        compose_url=values.get(ENV_COMPOSE_URL) or DEFAULT_COMPOSE_URL,
        driver_url=values.get(ENV_DRIVER_URL) or DEFAULT_DRIVER_URL,
        log_dir=Path(values.get(ENV_LOG_DIR) or DEFAULT_LOG_DIR),
        download_timeout=timeout,
    )
