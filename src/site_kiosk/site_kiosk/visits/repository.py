from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import now_iso
from ..common.ids import new_id
from ..core.constants import KEY_VISITS
from ..core.enums import Direction
from ..core.exceptions import StorageError
from ..database.serialization import load_json, preserve, save_json
from ..database.store import KeyValueStore
from .model import Declarations, VisitEvent

logger = logging.getLogger(__name__)


class VisitLedger(Protocol):
    """Append-only ledger. No edit or delete: only the full reset shrinks it."""

    def append(
        self,
        worker_id: str,
        direction: Direction,
        declarations: Declarations,
        *,
        timestamp: Optional[str] = None,
    ) -> VisitEvent:
        raise NotImplementedError

    def all(self) -> Sequence[VisitEvent]:
        raise NotImplementedError

    def recent(self, limit: int) -> Sequence[VisitEvent]:
        raise NotImplementedError


def build_event(
    worker_id: str,
    direction: Direction,
    declarations: Declarations,
    *,
    timestamp: Optional[str] = None,
) -> VisitEvent:
    """Event identity and capture time are assigned here, never by the caller."""
    if direction == Direction.IN:
        return VisitEvent(
            id=new_id(),
            worker_id=worker_id,
            direction=direction,
            timestamp=timestamp or now_iso(),
            ppe_worn=frozenset(declarations.ppe_worn),
            induction_confirmed=declarations.induction_confirmed,
            rams_confirmed=declarations.rams_confirmed,
            notes=declarations.notes,
        )

    # Declarations are not collected when signing out.
    return VisitEvent(
        id=new_id(),
        worker_id=worker_id,
        direction=direction,
        timestamp=timestamp or now_iso(),
        notes=declarations.notes,
    )


class KeyValueVisitLedger(VisitLedger):
    """In-memory copy of the ledger, saved whole on each append.

    An unreadable store leaves the ledger empty and read-only until reload().
    """

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._events: list[VisitEvent] = []
        self.loaded = False
        self.reload()

    def reload(self) -> bool:
        try:
            self._events = self._load()
        except StorageError:
            logger.exception("Visits could not be read; ledger is read-only until reloaded")
            self.loaded = False
            return False
        self.loaded = True
        return True

    def _load(self) -> list[VisitEvent]:
        raw = load_json(self._store, KEY_VISITS, list)
        if not isinstance(raw, list):
            logger.warning("Ignoring stored visits: expected a list, got %s", type(raw).__name__)
            preserve(self._store, KEY_VISITS, raw)
            return []

        events: list[VisitEvent] = []
        for item in raw:
            try:
                events.append(VisitEvent.from_dict(item))
            except (AttributeError, TypeError, ValueError):
                logger.warning("Skipping malformed visit entry: %r", item)
        if len(events) != len(raw):
            preserve(self._store, KEY_VISITS, raw)
        return events

    def append(
        self,
        worker_id: str,
        direction: Direction,
        declarations: Declarations,
        *,
        timestamp: Optional[str] = None,
    ) -> VisitEvent:
        if not self.loaded and not self.reload():
            raise StorageError("Stored visits could not be read; not overwriting them")

        event = build_event(worker_id, direction, declarations, timestamp=timestamp)
        events = self._events + [event]
        save_json(self._store, KEY_VISITS, [e.to_dict() for e in events])
        self._events = events
        return event

    def all(self) -> Sequence[VisitEvent]:
        return list(self._events)

    def recent(self, limit: int) -> Sequence[VisitEvent]:
        if limit <= 0:
            return []
        return list(reversed(self._events[-limit:]))

    def __len__(self) -> int:
        return len(self._events)

    def replace_all(self, events: Sequence[VisitEvent]) -> None:
        """In-memory swap only; the caller persists (used by the atomic reset)."""
        self._events = list(events)
        self.loaded = True
