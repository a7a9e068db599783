from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from ..common.datetime_utils import now_utc
from ..core.exceptions import StorageError
from .store import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Key-value store kept in one local JSON document.

    The kiosk must work without network access, so this is the default backend.
    Every write rewrites the file through a temp file + os.replace.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._data: dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self._quarantine(e)
            return {}

        if not isinstance(raw, dict):
            self._quarantine(TypeError(f"expected an object, got {type(raw).__name__}"))
            return {}

        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()}

    def _quarantine(self, error: Exception) -> None:
        # Keep the unreadable file so nothing already persisted is lost.
        stamp = now_utc().strftime("%Y%m%d%H%M%S")
        target = self._path.with_name(f"{self._path.name}.corrupt-{stamp}")
        try:
            self._path.replace(target)
        except OSError:
            logger.exception("Could not move unreadable store file %s aside", self._path)
            raise StorageError(f"Unreadable store file {self._path}") from error
        logger.warning("Store file %s unreadable (%s); moved to %s", self._path, error, target)

    def _flush(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=self._path.name, suffix=".tmp", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as e:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise StorageError(f"Could not write {self._path}") from e

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        data = dict(self._data)
        data.update(items)
        self._flush(data)
        self._data = data
