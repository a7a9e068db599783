"""Who is on site right now.

The roster is never stored: it is derived from the ledger by taking each
worker's latest event (append order) and keeping those whose latest event is
IN. Counting INs minus OUTs would drift on duplicate or missed sign-outs;
last-event-wins does not.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Direction
from ..visits.model import VisitEvent
from ..workers.model import WorkerProfile
from ..workers.repository import matches


def last_event_by_worker(events: Iterable[VisitEvent]) -> dict[str, VisitEvent]:
    """Single pass; a later event for the same worker overwrites an earlier one."""
    latest: dict[str, VisitEvent] = {}
    for event in events:
        latest[event.worker_id] = event
    return latest


def on_site_ids(events: Iterable[VisitEvent]) -> set[str]:
    return {wid for wid, e in last_event_by_worker(events).items() if e.direction == Direction.IN}


def derive_on_site(events: Iterable[VisitEvent], workers: Iterable[WorkerProfile]) -> list[WorkerProfile]:
    """On-site workers in directory order.

    Events whose worker is missing from the directory are left out.
    """
    active = on_site_ids(events)
    return [w for w in workers if w.id in active]


def filter_roster(workers: Sequence[WorkerProfile], term: Optional[str]) -> list[WorkerProfile]:
    if not term or not term.strip():
        return list(workers)
    return [w for w in workers if matches(w, term)]


class RosterIndex:
    """Incremental latest-event-per-worker cache.

    Rebuilt from the ledger on load, then fed every appended event, so it
    always agrees with last_event_by_worker(ledger.all()).
    """

    def __init__(self, events: Iterable[VisitEvent] = ()):
        self._latest: dict[str, VisitEvent] = {}
        self.rebuild(events)

    def rebuild(self, events: Iterable[VisitEvent]) -> None:
        self._latest = last_event_by_worker(events)

    def observe(self, event: VisitEvent) -> None:
        self._latest[event.worker_id] = event

    def clear(self) -> None:
        self._latest = {}

    def is_on_site(self, worker_id: str) -> bool:
        event = self._latest.get(worker_id)
        return event is not None and event.direction == Direction.IN

    def on_site_ids(self) -> set[str]:
        return {wid for wid, e in self._latest.items() if e.direction == Direction.IN}

    def on_site(self, workers: Iterable[WorkerProfile]) -> list[WorkerProfile]:
        return [w for w in workers if self.is_on_site(w.id)]
