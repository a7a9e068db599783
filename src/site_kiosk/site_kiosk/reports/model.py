from __future__ import annotations

from dataclasses import astuple, dataclass

CSV_HEADERS = (
    "Timestamp",
    "Direction",
    "Name",
    "Company",
    "Role",
    "CSCS",
    "Phone",
    "Induction",
    "RAMS Ack",
    "PPE",
    "Notes",
)


@dataclass(frozen=True)
class ReportRow:
    """Read-model for export: one ledger event joined with its worker."""

    timestamp: str
    direction: str
    name: str
    company: str
    role: str
    cscs: str
    phone: str
    induction: str
    rams_ack: str
    ppe: str
    notes: str

    def as_tuple(self) -> tuple[str, ...]:
        return astuple(self)

    def to_dict(self) -> dict:
        return dict(zip(CSV_HEADERS, self.as_tuple()))
