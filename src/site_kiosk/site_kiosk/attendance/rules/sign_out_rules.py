from __future__ import annotations

from typing import Tuple

from ...core.enums import RejectionReason
from ...settings.model import PolicySettings
from ...visits.model import Declarations
from .base import SignRules


class SignOutRules(SignRules):
    """Exit: identity only."""

    def check_declarations(
        self, declarations: Declarations, settings: PolicySettings
    ) -> tuple[list[RejectionReason], Tuple[str, ...]]:
        return [], ()
