from __future__ import annotations

from typing import Tuple

from ...core.enums import RejectionReason
from ...ppe.catalog import ordered
from ...settings.model import PolicySettings
from ...visits.model import Declarations
from .base import SignRules


class SignInRules(SignRules):
    """Entry: identity plus the declarations and PPE the site policy demands."""

    def check_declarations(
        self, declarations: Declarations, settings: PolicySettings
    ) -> tuple[list[RejectionReason], Tuple[str, ...]]:
        reasons = []
        if settings.require_induction and not declarations.induction_confirmed:
            reasons.append(RejectionReason.INDUCTION_NOT_CONFIRMED)
        if settings.require_rams and not declarations.rams_confirmed:
            reasons.append(RejectionReason.RAMS_NOT_CONFIRMED)

        missing = tuple(ordered(settings.require_ppe - declarations.ppe_worn))
        if missing:
            reasons.append(RejectionReason.MISSING_PPE)

        if not declarations.site_rules_acknowledged:
            reasons.append(RejectionReason.SITE_RULES_NOT_ACKNOWLEDGED)
        return reasons, missing
