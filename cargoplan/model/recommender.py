from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from .catalog import Catalog
from .entities import ItemType


@dataclass
class Recommendation:
    item_type: ItemType
    max_quantity: int


def max_quantity(item_type: ItemType, remaining_volume: float, remaining_weight: float) -> int:
    by_volume = math.floor(remaining_volume / item_type.volume)
    by_weight = math.floor(remaining_weight / item_type.weight)
    return min(by_volume, by_weight)


def recommend(
    catalog: Catalog, remaining_volume: float, remaining_weight: float
) -> List[Recommendation]:
    """Catalog items that still fit the leftover volume and weight, with how many."""
    recommendations: List[Recommendation] = []
    for item_type in catalog.list_item_types():
        if item_type.volume <= 0 or item_type.weight <= 0:
            continue
        quantity = max_quantity(item_type, remaining_volume, remaining_weight)
        if quantity > 0:
            recommendations.append(Recommendation(item_type, quantity))
    return recommendations


def merge_recommendations(
    batches: Iterable[Iterable[Recommendation]],
) -> List[Recommendation]:
    merged: Dict[Any, Recommendation] = {}
    for batch in batches:
        for rec in batch:
            existing = merged.get(rec.item_type.id)
            if existing:
                existing.max_quantity += rec.max_quantity
            else:
                merged[rec.item_type.id] = Recommendation(rec.item_type, rec.max_quantity)
    return list(merged.values())
