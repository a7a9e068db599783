from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..common.validators import clean_str


@dataclass(frozen=True)
class WorkerProfile:
    """Domain entity: a person who signs in/out at the site.

    Note: the whole profile is the unit of replacement on upsert.
    """

    id: str
    name: str
    company: str
    role: str = ""
    cscs: str = ""
    phone: str = ""
    email: str = ""
    emergency_contact: str = ""
    vehicle_reg: str = ""

    @property
    def label(self) -> str:
        return f"{self.name} ({self.company})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "company": self.company,
            "role": self.role,
            "cscs": self.cscs,
            "phone": self.phone,
            "email": self.email,
            "emergencyContact": self.emergency_contact,
            "vehicleReg": self.vehicle_reg,
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "WorkerProfile":
        return cls(
            id=clean_str(raw.get("id")),
            name=clean_str(raw.get("name")),
            company=clean_str(raw.get("company")),
            role=clean_str(raw.get("role")),
            cscs=clean_str(raw.get("cscs")),
            phone=clean_str(raw.get("phone")),
            email=clean_str(raw.get("email")),
            emergency_contact=clean_str(raw.get("emergencyContact")),
            vehicle_reg=clean_str(raw.get("vehicleReg")),
        )
