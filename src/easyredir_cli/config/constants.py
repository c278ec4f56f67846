"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "easyredir-cli"
APP_AUTHOR = "easyredir-cli"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_API_KEY = "EASYREDIR_API_KEY"
ENV_API_SECRET = "EASYREDIR_API_SECRET"
ENV_PROFILE = "EASYREDIR_PROFILE"
ENV_BASE_URL = "EASYREDIR_BASE_URL"

# API defaults
DEFAULT_BASE_URL = "https://api.easyredir.com/v1"
MEDIA_TYPE = "application/json; charset=utf-8"
IDEMPOTENCY_HEADER = "Idempotency-Key"
DEFAULT_TIMEOUT = 30.0
