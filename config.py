"""
Centralized configuration and feature flags for Xenith.

Precedence:
    Streamlit st.secrets > environment variables (including those loaded from .env) > defaults

Notes:
- Safe to import outside a running Streamlit app (tests, scripts).
- Loads a .env file once at import time (does not override existing environment values).
- Provides typed getters and feature flag helpers.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Dict, Optional

import streamlit as st
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Read .env if present; do not override already-set variables
load_dotenv(override=False)

DEFAULT_TICK_MS = 100
DEFAULT_REPORT_INTERVAL_MS = 2000
DEFAULT_ACTIVITY_LIMIT = 10
DEFAULT_LOG_LEVEL = "WARNING"

# Known feature flags and their defaults
_FLAG_DEFAULTS: Dict[str, bool] = {
    "XN_ENABLE_ANALYSIS_PREVIEW": True,
    "XN_ENABLE_FAST_SIMULATION": False,
}


def _secrets_get(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Read a value from st.secrets; return default when no secrets file is configured.
    """
    try:
        return st.secrets.get(key, default)
    except FileNotFoundError:
        return default
    except Exception as e:  # st.secrets raises its own parse errors for malformed TOML
        logger.debug("st.secrets unavailable: %s", e)
        return default


def _get_value(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Fetch config value with precedence: st.secrets -> os.environ -> default.
    Empty strings are treated as unset.

    Note: uses _secrets_getter indirection so tests can monkeypatch secrets source.
    """
    val = _secrets_getter(key, None)
    if val is not None and str(val).strip() != "":
        return str(val)

    env_val = os.getenv(key)
    if env_val is not None and env_val.strip() != "":
        return env_val

    return default


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    val = str(value).strip().lower()
    return val in {"1", "true", "yes", "on", "y", "t"}


def _parse_int(key: str, value: Optional[str], default: Optional[int]) -> Optional[int]:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        logger.warning("Ignoring non-integer value for %s: %r", key, value)
        return default


@lru_cache(maxsize=None)
def get_int(key: str, default: int, minimum: int = 1) -> int:
    """
    Return an integer setting; values below `minimum` or unparsable values fall back to default.
    """
    parsed = _parse_int(key, _get_value(key), default)
    if parsed is None or parsed < minimum:
        if parsed is not None:
            logger.warning("Ignoring out-of-range value for %s: %r", key, parsed)
        return default
    return parsed


def get_tick_ms() -> int:
    """Simulation tick interval in milliseconds. Key: XN_TICK_MS"""
    return get_int("XN_TICK_MS", DEFAULT_TICK_MS)


def get_report_interval_ms() -> int:
    """Interval between periodic activity messages. Key: XN_REPORT_INTERVAL_MS"""
    return get_int("XN_REPORT_INTERVAL_MS", DEFAULT_REPORT_INTERVAL_MS)


def get_activity_limit() -> int:
    """Number of activity entries shown in the feed. Key: XN_ACTIVITY_LIMIT"""
    return get_int("XN_ACTIVITY_LIMIT", DEFAULT_ACTIVITY_LIMIT)


@lru_cache(maxsize=None)
def get_message_seed() -> Optional[int]:
    """
    Seed for the activity feed message picker, or None for an unseeded feed.
    Key: XN_MESSAGE_SEED
    """
    return _parse_int("XN_MESSAGE_SEED", _get_value("XN_MESSAGE_SEED"), None)


@lru_cache(maxsize=None)
def get_taxonomy_path() -> Optional[str]:
    """Optional JSON taxonomy file replacing the built-in categories. Key: XN_TAXONOMY_PATH"""
    return _get_value("XN_TAXONOMY_PATH")


@lru_cache(maxsize=None)
def get_log_level() -> str:
    """Console log level name. Key: XN_LOG_LEVEL"""
    return (_get_value("XN_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()


@lru_cache(maxsize=None)
def is_feature_enabled(flag_name: str, default: bool = False) -> bool:
    """
    Return True/False for a feature flag, using precedence and tolerant parsing.
    """
    sec_val = _secrets_getter(flag_name, None)
    if sec_val is not None:
        return _parse_bool(str(sec_val), default)

    env_val = os.getenv(flag_name)
    if env_val is not None:
        return _parse_bool(env_val, default)

    return default


def is_enabled(flag_name: str) -> bool:
    """
    Convenient alias for is_feature_enabled using the flag's known default (False if unknown).
    """
    return is_feature_enabled(flag_name, _FLAG_DEFAULTS.get(flag_name, False))


@lru_cache(maxsize=None)
def feature_flags() -> Dict[str, bool]:
    """
    Return a dict of known feature flags with resolved boolean values.
    """
    return {name: is_enabled(name) for name in _FLAG_DEFAULTS}


def require(key_name: str, getter, hint: str) -> str:
    """
    Fetch a required setting using the provided getter function.
    Raises RuntimeError with a clear hint if missing.
    """
    val = getter()
    if not val:
        raise RuntimeError(f"Missing required configuration: {key_name}. {hint}")
    return str(val)


def require_flag(flag_name: str, ui_msg: str = "Feature is disabled") -> bool:
    """
    Check if a feature flag is enabled and show a user-friendly message if not.
    Returns True if enabled, False if disabled.
    """
    if is_enabled(flag_name):
        return True
    st.info(f"{ui_msg}. Set {flag_name}=1 to enable.")
    return False


def refresh_cache() -> None:
    """
    Clear cached values from lru_cache-enabled getters.
    Useful for tests or when environment/secrets change at runtime.
    """
    get_int.cache_clear()
    get_message_seed.cache_clear()
    get_taxonomy_path.cache_clear()
    get_log_level.cache_clear()
    is_feature_enabled.cache_clear()
    feature_flags.cache_clear()


def settings_summary() -> Dict[str, Any]:
    """Resolved settings, for the sidebar diagnostics expander."""
    return {
        "tick_ms": get_tick_ms(),
        "report_interval_ms": get_report_interval_ms(),
        "activity_limit": get_activity_limit(),
        "message_seed": get_message_seed(),
        "taxonomy_path": get_taxonomy_path(),
        "log_level": get_log_level(),
        **feature_flags(),
    }


# Expose internal getter for testing/mocking
_secrets_getter = _secrets_get

__all__ = [
    "get_int",
    "get_tick_ms",
    "get_report_interval_ms",
    "get_activity_limit",
    "get_message_seed",
    "get_taxonomy_path",
    "get_log_level",
    "is_feature_enabled",
    "is_enabled",
    "require_flag",
    "feature_flags",
    "require",
    "refresh_cache",
    "settings_summary",
    "_secrets_getter",
]
