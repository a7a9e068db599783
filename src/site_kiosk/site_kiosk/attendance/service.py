from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_iso
from ..common.ids import new_id
from ..core.constants import DEFAULT_HISTORY_LIMIT, KEY_VISITS, KEY_WORKERS
from ..core.enums import Direction
from ..core.exceptions import SignRejected, StorageError, ValidationError
from ..database.serialization import save_json_many
from ..database.store import KeyValueStore
from ..reports.model import ReportRow
from ..reports.service import AttendanceReportService
from ..roster.derivation import RosterIndex, filter_roster
from ..settings.service import SettingsService
from ..visits.model import Declarations, VisitEvent
from ..visits.repository import KeyValueVisitLedger
from ..workers.model import WorkerProfile
from ..workers.repository import KeyValueWorkerDirectory
from .factory import SignRulesFactory
from .validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignResult:
    worker: WorkerProfile
    event: VisitEvent
    on_site: bool


@dataclass(frozen=True)
class RollCall:
    site_name: str
    generated_at: str
    people: list[WorkerProfile]


class KioskState:
    """Application state: directory, ledger and the roster index over them.

    Everything is loaded from the store once; the index is rebuilt from the
    ledger here and then kept in step with every append.
    A repository whose read failed stays empty and refuses writes; refresh()
    retries it.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.workers = KeyValueWorkerDirectory(store)
        self.visits = KeyValueVisitLedger(store)
        self.roster = RosterIndex(self.visits.all())

    def refresh(self) -> None:
        if not self.workers.loaded:
            self.workers.reload()
        if not self.visits.loaded and self.visits.reload():
            self.roster.rebuild(self.visits.all())

    def require_loaded(self) -> None:
        self.refresh()
        if not (self.workers.loaded and self.visits.loaded):
            raise StorageError("Stored attendance data could not be read")

    def clear(self) -> None:
        # Both keys in one store write, then both in-memory views together.
        save_json_many(self.store, {KEY_WORKERS: [], KEY_VISITS: []})
        self.workers.replace_all([])
        self.visits.replace_all([])
        self.roster.clear()


def _normalized(profile: WorkerProfile) -> WorkerProfile:
    return replace(profile, **{f.name: getattr(profile, f.name).strip() for f in fields(profile)})


class KioskService:
    """Use case: sign people in/out, show who is on site, export, reset."""

    def __init__(
        self,
        state: KioskState,
        settings: SettingsService,
        *,
        rules_factory: Optional[SignRulesFactory] = None,
        reports: Optional[AttendanceReportService] = None,
    ):
        self._state = state
        self._settings = settings
        self._factory = rules_factory or SignRulesFactory()
        self._reports = reports or AttendanceReportService()

    def sign(self, direction: Direction, profile: WorkerProfile, declarations: Declarations) -> SignResult:
        """Validate, then upsert the profile and append the event.

        A blank profile id means a new person. Nothing is written on rejection.
        """
        self._state.require_loaded()
        profile = _normalized(profile)
        if profile.id and self._state.workers.find(profile.id) is None:
            raise ValidationError("Unknown worker")

        result = validate(direction, profile, declarations, self._settings.get(), factory=self._factory)
        if not result.ok:
            logger.info(
                "Sign %s rejected for %r (%s): %s",
                direction.value,
                profile.name,
                profile.company,
                ", ".join(r.value for r in result.reasons),
            )
            raise SignRejected(result)

        if not profile.id:
            profile = replace(profile, id=new_id())

        self._state.workers.upsert(profile)
        event = self._state.visits.append(profile.id, direction, declarations)
        self._state.roster.observe(event)

        logger.info("Signed %s: %s (%s) worker=%s", direction.value, profile.name, profile.company, profile.id)
        return SignResult(worker=profile, event=event, on_site=self._state.roster.is_on_site(profile.id))

    def sign_in(self, profile: WorkerProfile, declarations: Declarations) -> SignResult:
        return self.sign(Direction.IN, profile, declarations)

    def sign_out(self, profile: WorkerProfile, declarations: Optional[Declarations] = None) -> SignResult:
        return self.sign(Direction.OUT, profile, declarations or Declarations())

    def workers(self) -> list[WorkerProfile]:
        self._state.refresh()
        return list(self._state.workers.all())

    def on_site(self, term: Optional[str] = None) -> list[WorkerProfile]:
        self._state.refresh()
        people = self._state.roster.on_site(self._state.workers.all())
        return filter_roster(people, term)

    def roll_call(self) -> RollCall:
        return RollCall(
            site_name=self._settings.get().site_name,
            generated_at=now_iso(),
            people=self.on_site(),
        )

    def visit_count(self) -> int:
        return len(self._state.visits)

    def history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> list[ReportRow]:
        """Admin log: newest first."""
        self._state.refresh()
        return self._reports.build_rows(self._state.visits.recent(limit), self._state.workers.all())

    def export_csv(self, *, day: Optional[date] = None) -> tuple[str, str]:
        self._state.refresh()
        return self._reports.build_csv(self._state.visits.all(), self._state.workers.all(), day=day)

    def reset_all(self) -> None:
        """Irreversible. Callers confirm intent first."""
        workers, visits = len(self._state.workers.all()), self.visit_count()
        self._state.clear()
        logger.warning("All data reset (%d workers, %d visits removed)", workers, visits)
