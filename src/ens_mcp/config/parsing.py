"""Parsing helpers for configuration values."""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _normalize_log_level(value: str) -> str:
    normalized = value.strip().upper()
    if normalized not in _VALID_LOG_LEVELS:
        logger.warning(
            "Invalid log level '%s'. Falling back to 'INFO'. Valid options: %s",
            value,
            ", ".join(sorted(_VALID_LOG_LEVELS)),
        )
        return "INFO"
    return normalized


def _parse_positive_float(value: Any, name: str, default: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s '%s'. Using default %s", name, value, default)
        return default
    if parsed <= 0:
        logger.warning("%s must be positive, got %s. Using default %s", name, value, default)
        return default
    return parsed


def _parse_non_negative_int(value: Any, name: str, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s '%s'. Using default %s", name, value, default)
        return default
    if parsed < 0:
        logger.warning("%s must be >= 0, got %s. Using default %s", name, value, default)
        return default
    return parsed


def _join_provider_urls(value: Any) -> Optional[str]:
    """Accept a single URL string or a TOML list and return the override form.

    Lists always replace the built-in providers, so a one-element list keeps
    a trailing comma.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if str(item).strip()]
        if not items:
            return None
        return ",".join(items) if len(items) > 1 else f"{items[0]},"
    return str(value)
