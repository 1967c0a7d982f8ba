# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

import os
import logging
from typing import Mapping, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "t", "true", "y", "yes", "on")
_FALSE_VALUES = ("0", "f", "false", "n", "no", "off")

def parse_env_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Read an integer from the environment, falling back to the default on bad input."""
    value = env.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Error parsing {key} as int: {value!r}. Using default value: {default}")
        return default

def parse_env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    """Read a boolean from the environment, falling back to the default on bad input."""
    value = env.get(key)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Error parsing {key} as bool: {value!r}. Using default value: {default}")
    return default

class Config:
    """Application configuration, read from environment variables."""

    DEBUG: bool
    PORT: int
    METRICS_PORT: int
    WEBROOT: str
    USE_MEMORY: bool
    LOG_FILE_PATH: str
    CONTENT_DIR: str

    # Build information, injected by the Docker build
    VERSION: Optional[str]
    GIT_COMMIT: str
    BUILD_TIME: str

    def __init__(self, env: Optional[Mapping[str, str]] = None):
        env = os.environ if env is None else env
        self.DEBUG = parse_env_bool(env, "DEBUG", False)
        self.PORT = parse_env_int(env, "PORT", 8080)
        self.METRICS_PORT = parse_env_int(env, "METRICS_PORT", 9090)
        self.WEBROOT = env.get("WEBROOT", "/app/public")
        self.USE_MEMORY = parse_env_bool(env, "USE_MEMORY", False)
        self.LOG_FILE_PATH = env.get("LOG_FILE_PATH") or "/var/log/access.log"
        self.CONTENT_DIR = env.get("CONTENT_DIR", "blog/content/post")

        self.VERSION = env.get("VERSION") or None
        self.GIT_COMMIT = env.get("GIT_COMMIT", "MISSING GIT COMMIT")
        self.BUILD_TIME = env.get("BUILD_TIME", "MISSING BUILD TIME")

    def log_summary(self, log: logging.Logger):
        """Dump the effective configuration, used when debug mode is on."""
        log.info("Configuration:")
        log.info(f"* Debug: {self.DEBUG}")
        log.info(f"* Port: {self.PORT}")
        log.info(f"* Metrics Port: {self.METRICS_PORT}")
        log.info(f"* Web Root: {self.WEBROOT}")
        log.info(f"* Use Memory: {self.USE_MEMORY}")
        log.info(f"* Access Log: {self.LOG_FILE_PATH}")

    def __repr__(self):
        return f"<Config port={self.PORT} metrics_port={self.METRICS_PORT} webroot=\"{self.WEBROOT}\" use_memory={self.USE_MEMORY}>"
