"""Shared configuration constants for auto-local-modx.

Centralizes paths, URLs, default answers and binaries used by modules.
"""

import logging
import os


def env_int(name: str, default: int) -> int:
    """Integer from the environment; unset or malformed values give default."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning("Ignoring %s=%r: not an integer; using %s", name, raw, default)
        return default
    if value <= 0:
        logging.warning("Ignoring %s=%r: must be positive; using %s", name, raw, default)
        return default
    return value

PUBLIC_FOLDER = "public"
PACKAGES_FOLDER = "packages"
PROMPT_FILE = "autolocal-modx.json"
LOG_DIR = os.environ.get("LOCALMODX_LOG_DIR", "")

MODX_ARCHIVE_URL = os.environ.get(
    "MODX_ARCHIVE_URL", "https://github.com/modxcms/revolution/archive/master.zip"
)
MODX_ARCHIVE_FILE = "modx.zip"
MODX_EXTRACTED_DIR = "revolution-master"
REPOMAN_REPO_URL = "https://github.com/craftsmancoding/repoman"

PHP_BIN = os.environ.get("PHP_BIN", "php")
GIT_BIN = os.environ.get("GIT_BIN", "git")
COMPOSER_BIN = os.environ.get("COMPOSER_BIN", "composer")
CMD_TIMEOUT = env_int("LOCALMODX_CMD_TIMEOUT", 1800)  # seconds
DOWNLOAD_TIMEOUT = env_int("LOCALMODX_DOWNLOAD_TIMEOUT", 60)
DOWNLOAD_CHUNK = 64 * 1024

DEFAULT_DB_NAME = ""
DEFAULT_DB_USER = "root"
DEFAULT_DB_PASS = "root"
DEFAULT_DB_HOST = "localhost"
DEFAULT_TABLE_PREFIX = "modx_"
DEFAULT_LANGUAGE = "en"
