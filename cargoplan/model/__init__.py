"""
Load calculation engine.

- entities: catalog entries, free spaces, placements and container loads
- allocator: free-space tracking and splitting inside one container
- packer: first-fit multi-container simulation
- utilization / recommender: usage ratios and filler suggestions
- calculator: catalog resolution, result assembly and partial updates
"""

from __future__ import annotations

from .calculator import (
    CalculationPatch,
    CalculationResult,
    CalculationStatus,
    ContainerSummary,
    apply_update,
    compute_calculation,
)
from .catalog import Catalog, InMemoryCatalog
from .entities import (
    ContainerLoad,
    ContainerType,
    FreeSpace,
    ItemGroup,
    ItemRequest,
    ItemType,
    ResolvedRequest,
)
from .errors import CalculationError, InvalidQuantity, NotFound, OversizedItem
from .packer import PackingSimulator, simulate
from .recommender import Recommendation, recommend
from .utilization import Utilization, measure

__all__ = [
    "CalculationPatch",
    "CalculationResult",
    "CalculationStatus",
    "ContainerSummary",
    "apply_update",
    "compute_calculation",
    "Catalog",
    "InMemoryCatalog",
    "ContainerLoad",
    "ContainerType",
    "FreeSpace",
    "ItemGroup",
    "ItemRequest",
    "ItemType",
    "ResolvedRequest",
    "CalculationError",
    "InvalidQuantity",
    "NotFound",
    "OversizedItem",
    "PackingSimulator",
    "simulate",
    "Recommendation",
    "recommend",
    "Utilization",
    "measure",
]
