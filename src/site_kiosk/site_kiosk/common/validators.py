from __future__ import annotations

from typing import Any


def is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def clean_str(value: Any) -> str:
    """Coerce optional/loosely typed input into a plain string."""
    if value is None:
        return ""
    return str(value)


def as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
