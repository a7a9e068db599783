from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Mapping, Optional

from ..core import constants
from ..ppe.catalog import ordered


@dataclass(frozen=True)
class PolicySettings:
    """Site policy: which declarations/PPE are mandatory, plus the admin PIN."""

    site_name: str = constants.DEFAULT_SITE_NAME
    admin_pin: str = constants.DEFAULT_ADMIN_PIN
    require_induction: bool = constants.DEFAULT_REQUIRE_INDUCTION
    require_rams: bool = constants.DEFAULT_REQUIRE_RAMS
    require_ppe: FrozenSet[str] = field(default_factory=lambda: frozenset(constants.DEFAULT_REQUIRE_PPE))

    def to_dict(self) -> dict:
        return {
            "siteName": self.site_name,
            "adminPin": self.admin_pin,
            "requireInduction": self.require_induction,
            "requireRAMS": self.require_rams,
            "requirePPE": ordered(self.require_ppe),
        }


@dataclass(frozen=True)
class SettingsPatch:
    """Partial update: ``None`` means "leave as is"."""

    site_name: Optional[str] = None
    admin_pin: Optional[str] = None
    require_induction: Optional[bool] = None
    require_rams: Optional[bool] = None
    require_ppe: Optional[FrozenSet[str]] = None

    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (self.site_name, self.admin_pin, self.require_induction, self.require_rams, self.require_ppe)
        )

    def apply(self, base: PolicySettings) -> PolicySettings:
        return PolicySettings(
            site_name=base.site_name if self.site_name is None else str(self.site_name),
            admin_pin=base.admin_pin if self.admin_pin is None else str(self.admin_pin),
            require_induction=base.require_induction if self.require_induction is None else bool(self.require_induction),
            require_rams=base.require_rams if self.require_rams is None else bool(self.require_rams),
            require_ppe=base.require_ppe if self.require_ppe is None else frozenset(self.require_ppe),
        )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SettingsPatch":
        """Build from a stored/posted dict; wrongly-typed fields are ignored."""

        def _str(key: str) -> Optional[str]:
            v = raw.get(key)
            return v if isinstance(v, str) else None

        def _bool(key: str) -> Optional[bool]:
            v = raw.get(key)
            return v if isinstance(v, bool) else None

        ppe = raw.get("requirePPE")
        require_ppe = None
        if isinstance(ppe, (list, tuple, set, frozenset)) and all(isinstance(p, str) for p in ppe):
            require_ppe = frozenset(ppe)

        return cls(
            site_name=_str("siteName"),
            admin_pin=_str("adminPin"),
            require_induction=_bool("requireInduction"),
            require_rams=_bool("requireRAMS"),
            require_ppe=require_ppe,
        )


def merge_stored(raw: Any) -> PolicySettings:
    """Layer a stored (possibly partial or foreign) blob onto the defaults."""
    if not isinstance(raw, Mapping):
        return PolicySettings()
    return SettingsPatch.from_dict(raw).apply(PolicySettings())
