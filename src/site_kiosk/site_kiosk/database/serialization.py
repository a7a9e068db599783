from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, TypeVar

from ..core.constants import CORRUPT_SUFFIX
from ..core.exceptions import StorageError
from .store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def load_json(store: KeyValueStore, key: str, fallback: Callable[[], T]) -> Any | T:
    """Read and parse one blob; absent or unparsable data yields fallback().

    An unparsable blob is copied to ``<key>.corrupt`` before falling back, so
    the next save under ``key`` cannot destroy it. A read that raises is not
    "absent": it surfaces as StorageError so callers never save over data
    they could not see.
    """

    try:
        raw = store.get(key)
    except Exception as e:
        raise StorageError(f"Reading {key} failed") from e

    if raw is None or raw == "":
        return fallback()

    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Stored value for %s is not valid JSON; using defaults", key)
        try:
            store.set(key + CORRUPT_SUFFIX, raw)
        except Exception:
            logger.exception("Could not preserve unreadable value of %s", key)
        return fallback()


def save_json(store: KeyValueStore, key: str, value: Any) -> None:
    store.set(key, dumps(value))


def save_json_many(store: KeyValueStore, items: Mapping[str, Any]) -> None:
    store.set_many({k: dumps(v) for k, v in items.items()})


def preserve(store: KeyValueStore, key: str, value: Any) -> None:
    """Copy a partly unusable blob to ``<key>.corrupt`` before it gets rewritten."""
    try:
        save_json(store, key + CORRUPT_SUFFIX, value)
    except Exception:
        logger.exception("Could not preserve partly unreadable value of %s", key)
