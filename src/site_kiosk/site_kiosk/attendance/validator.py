from __future__ import annotations

from typing import Optional

from ..core.enums import Direction
from ..settings.model import PolicySettings
from ..visits.model import Declarations
from ..workers.model import WorkerProfile
from .factory import SignRulesFactory
from .rules.base import ValidationResult


def validate(
    direction: Direction,
    profile: WorkerProfile,
    declarations: Declarations,
    settings: PolicySettings,
    *,
    factory: Optional[SignRulesFactory] = None,
) -> ValidationResult:
    """Pure precondition gate: every failing rule is reported, nothing is written."""
    rules = (factory or SignRulesFactory()).for_direction(direction)
    return rules.check(profile, declarations, settings)
