"""
Monitor settings: feed location, request identity, cache lifetime, release links.
Values come from the environment (a local .env is loaded first); all have defaults.
"""

import logging
import os
from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(RuntimeError):
    """Raised when a configuration value is present but unusable."""


def get_float_env(name: str, default: float) -> float:
    """Read a float setting, falling back to the default when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def get_int_env(name: str, default: int) -> int:
    """Read an integer setting, falling back to the default when unset or blank."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def configure_logging(level: str | int | None = None, force: bool = False) -> None:
    """Set up the root logger with a terse format. Pass force=True to reconfigure."""
    logging.basicConfig(
        level=level if level is not None else LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


# Upstream feed: one JSON document with every store plus the submission registry
EXTENSION_FEED_URL = os.getenv(
    "EXTENSION_FEED_URL",
    "https://pub-079f1d96c32c4039998e87fd3c5b549d.r2.dev/extension-latest.json",
)

# The feed host blocks default client user agents
FEED_USER_AGENT = os.getenv(
    "FEED_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
)
FEED_TIMEOUT_SECONDS = get_float_env("FEED_TIMEOUT_SECONDS", 10.0)

# How long the dashboard reuses a fetched feed before asking upstream again
CACHE_TTL_SECONDS = get_int_env("CACHE_TTL_SECONDS", 300)

# Reserved feed key holding submitted versions instead of store listings
SUBMISSION_REGISTRY_KEY = "gitlab"

# Release pages are addressed as <base>/<slug>-<version>
RELEASE_URL_BASE = os.getenv(
    "RELEASE_URL_BASE",
    "https://gitlab.com/eyeo/browser-extensions-and-premium/extensions/extensions/-/releases",
).rstrip("/")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
