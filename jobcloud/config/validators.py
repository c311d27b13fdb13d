"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

VOCABULARY_KEYS = ("roles", "cities", "job_types", "job_levels")


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    suggestions = config_dict.get("suggestions", {})
    if isinstance(suggestions, dict):
        hide_delay = suggestions.get("hide_delay_ms")
        if hide_delay == 0:
            warning_messages.append(
                "suggestions.hide_delay_ms is 0; a click on a suggestion may be lost when the field loses focus"
            )

        for key in VOCABULARY_KEYS:
            entries = suggestions.get(key)
            if not isinstance(entries, list):
                continue
            normalized = [e.strip().lower() for e in entries if isinstance(e, str)]
            duplicates = sorted({e for e in normalized if normalized.count(e) > 1})
            if duplicates:
                warning_messages.append(
                    f"Duplicate entries in suggestions.{key} will be shown twice: {', '.join(duplicates)}"
                )

    store = config_dict.get("store", {})
    if isinstance(store, dict):
        timeout = store.get("http_request_timeout")
        if store.get("backend") == "sqlite" and timeout is not None:
            warning_messages.append(
                "store.http_request_timeout is ignored by the sqlite backend"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
