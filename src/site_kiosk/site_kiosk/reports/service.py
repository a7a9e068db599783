from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import export_date
from ..core.constants import EXPORT_FILENAME_PREFIX, PPE_DELIMITER
from ..ppe.catalog import ordered
from ..visits.model import VisitEvent
from ..workers.model import WorkerProfile
from .model import CSV_HEADERS, ReportRow


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def to_rows(visits: Iterable[VisitEvent], workers: Iterable[WorkerProfile]) -> list[ReportRow]:
    """One row per event, ledger order. Unknown workers become empty fields."""
    by_id = {w.id: w for w in workers}
    rows = []
    for v in visits:
        w: Optional[WorkerProfile] = by_id.get(v.worker_id)
        rows.append(
            ReportRow(
                timestamp=v.timestamp or "",
                direction=v.direction.value,
                name=w.name if w else "",
                company=w.company if w else "",
                role=w.role if w else "",
                cscs=w.cscs if w else "",
                phone=w.phone if w else "",
                induction=_yes_no(v.induction_confirmed),
                rams_ack=_yes_no(v.rams_confirmed),
                ppe=PPE_DELIMITER.join(ordered(v.ppe_worn)),
                notes=v.notes or "",
            )
        )
    return rows


def to_csv(rows: Sequence[ReportRow]) -> str:
    """Header first, every field double-quoted, embedded quotes doubled."""
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in rows:
        writer.writerow(row.as_tuple())
    return out.getvalue()


def export_filename(day: Optional[date] = None) -> str:
    return f"{EXPORT_FILENAME_PREFIX}{export_date(day)}.csv"


class AttendanceReportService:
    """Projection of the ledger for the admin log and CSV export."""

    def build_rows(self, visits: Sequence[VisitEvent], workers: Sequence[WorkerProfile]) -> list[ReportRow]:
        return to_rows(visits, workers)

    def build_csv(
        self,
        visits: Sequence[VisitEvent],
        workers: Sequence[WorkerProfile],
        *,
        day: Optional[date] = None,
    ) -> tuple[str, str]:
        """(filename, csv text)."""
        return export_filename(day), to_csv(to_rows(visits, workers))
