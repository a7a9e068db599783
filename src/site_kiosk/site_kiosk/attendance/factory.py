from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Direction
from .rules.base import SignRules
from .rules.sign_in_rules import SignInRules
from .rules.sign_out_rules import SignOutRules


@dataclass
class SignRulesFactory:
    """Factory Pattern: choose the rule set for a sign direction."""

    def for_direction(self, direction: Direction) -> SignRules:
        if direction == Direction.IN:
            return SignInRules()
        return SignOutRules()
