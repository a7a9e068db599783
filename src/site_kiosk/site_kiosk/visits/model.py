from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping

from ..common.validators import as_bool, clean_str
from ..core.enums import Direction
from ..core.exceptions import ValidationError
from ..ppe.catalog import ordered


@dataclass(frozen=True)
class Declarations:
    """What the person declares at the kiosk (only meaningful for IN)."""

    ppe_worn: FrozenSet[str] = field(default_factory=frozenset)
    induction_confirmed: bool = False
    rams_confirmed: bool = False
    site_rules_acknowledged: bool = False
    notes: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Declarations":
        ppe = raw.get("ppe") or raw.get("ppeWorn") or []
        if isinstance(ppe, str):
            ppe = [ppe]
        if not isinstance(ppe, (list, tuple, set, frozenset)):
            raise ValidationError("PPE must be a list of item ids")
        return cls(
            ppe_worn=frozenset(str(p) for p in ppe),
            induction_confirmed=as_bool(raw.get("induction")),
            rams_confirmed=as_bool(raw.get("rams")),
            site_rules_acknowledged=as_bool(raw.get("ack")),
            notes=clean_str(raw.get("notes")),
        )


@dataclass(frozen=True)
class VisitEvent:
    """Domain entity: one immutable ledger entry."""

    id: str
    worker_id: str
    direction: Direction
    timestamp: str
    ppe_worn: FrozenSet[str] = field(default_factory=frozenset)
    induction_confirmed: bool = False
    rams_confirmed: bool = False
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workerId": self.worker_id,
            "direction": self.direction.value,
            "timeISO": self.timestamp,
            "ppe": ordered(self.ppe_worn),
            "induction": self.induction_confirmed,
            "rams": self.rams_confirmed,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "VisitEvent":
        ppe = raw.get("ppe") or []
        return cls(
            id=clean_str(raw.get("id")),
            worker_id=clean_str(raw.get("workerId")),
            direction=Direction(raw.get("direction")),
            timestamp=clean_str(raw.get("timeISO")),
            ppe_worn=frozenset(str(p) for p in ppe) if isinstance(ppe, (list, tuple)) else frozenset(),
            induction_confirmed=bool(raw.get("induction")),
            rams_confirmed=bool(raw.get("rams")),
            notes=clean_str(raw.get("notes")),
        )
