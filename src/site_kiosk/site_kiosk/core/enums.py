from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Direction of a visit event."""

    IN = "IN"
    OUT = "OUT"


class RejectionReason(str, Enum):
    """Why a sign-in/out attempt was refused."""

    MISSING_NAME = "MISSING_NAME"
    MISSING_COMPANY = "MISSING_COMPANY"
    INDUCTION_NOT_CONFIRMED = "INDUCTION_NOT_CONFIRMED"
    RAMS_NOT_CONFIRMED = "RAMS_NOT_CONFIRMED"
    MISSING_PPE = "MISSING_PPE"
    SITE_RULES_NOT_ACKNOWLEDGED = "SITE_RULES_NOT_ACKNOWLEDGED"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    JSON = "json"
    MYSQL = "mysql"
