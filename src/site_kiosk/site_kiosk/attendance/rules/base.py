from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from ...common.validators import is_blank
from ...core.enums import RejectionReason
from ...settings.model import PolicySettings
from ...visits.model import Declarations
from ...workers.model import WorkerProfile


@dataclass(frozen=True)
class ValidationResult:
    reasons: Tuple[RejectionReason, ...] = ()
    missing_ppe: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.reasons

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "reasons": [r.value for r in self.reasons],
            "missingPPE": list(self.missing_ppe),
        }


class SignRules(ABC):
    """Strategy Pattern: the checks a sign attempt must pass in one direction."""

    def check(self, profile: WorkerProfile, declarations: Declarations, settings: PolicySettings) -> ValidationResult:
        reasons = list(self.check_identity(profile))
        extra, missing_ppe = self.check_declarations(declarations, settings)
        reasons.extend(extra)
        return ValidationResult(reasons=tuple(reasons), missing_ppe=missing_ppe)

    def check_identity(self, profile: WorkerProfile) -> list[RejectionReason]:
        reasons = []
        if is_blank(profile.name):
            reasons.append(RejectionReason.MISSING_NAME)
        if is_blank(profile.company):
            reasons.append(RejectionReason.MISSING_COMPANY)
        return reasons

    @abstractmethod
    def check_declarations(
        self, declarations: Declarations, settings: PolicySettings
    ) -> tuple[list[RejectionReason], Tuple[str, ...]]:
        raise NotImplementedError
