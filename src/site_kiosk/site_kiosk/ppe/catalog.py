from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class PPEItem:
    item_id: str
    label: str


PPE_ITEMS: tuple[PPEItem, ...] = (
    PPEItem("boots", "Safety boots"),
    PPEItem("hivis", "Hi-vis"),
    PPEItem("hardhat", "Hard hat"),
    PPEItem("gloves", "Gloves"),
    PPEItem("eyewear", "Eye protection"),
)


def ordered(item_ids: Iterable[str]) -> list[str]:
    """Catalog order first, unknown ids after (sorted) - stable output for sets."""
    ids = set(item_ids)
    known = [item.item_id for item in PPE_ITEMS if item.item_id in ids]
    return known + sorted(ids - set(known))


def as_dicts() -> list[dict]:
    return [{"id": item.item_id, "label": item.label} for item in PPE_ITEMS]
