from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence, Tuple

from .catalog import Catalog
from .entities import (
    ContainerLoad,
    ContainerType,
    ItemGroup,
    ItemRequest,
    ResolvedRequest,
)
from .errors import InvalidQuantity, NotFound
from .packer import simulate
from .recommender import Recommendation, merge_recommendations, recommend
from .utilization import Utilization, measure

logger = logging.getLogger(__name__)


class CalculationStatus(str, enum.Enum):
    planned = "Planned"
    shipped = "Shipped"


@dataclass(frozen=True)
class ContainerSummary:
    index: int
    usage: Utilization
    running_volume: float
    running_weight: float
    groups: List[ItemGroup] = field(default_factory=list)

    @property
    def utilization(self) -> float:
        return round(self.usage.utilization, 1)


@dataclass(frozen=True)
class CalculationResult:
    label: str
    container_type: ContainerType
    requests: Tuple[ResolvedRequest, ...]
    total_volume: float
    total_weight: float
    containers: Tuple[ContainerSummary, ...]
    recommendations: Tuple[Recommendation, ...]
    status: CalculationStatus = CalculationStatus.planned

    @property
    def calculated_containers(self) -> int:
        return len(self.containers)

    @property
    def container_volume(self) -> float:
        return self.container_type.volume

    @property
    def weight_capacity(self) -> float:
        return self.container_type.weight_capacity

    @property
    def utilization(self) -> float:
        """Mean of the per-container utilization figures."""
        if not self.containers:
            return 0.0
        return sum(c.utilization for c in self.containers) / len(self.containers)

    @property
    def item_requests(self) -> List[ItemRequest]:
        return [ItemRequest(r.item_type.id, r.quantity) for r in self.requests]


@dataclass(frozen=True)
class CalculationPatch:
    label: Optional[str] = None
    status: Optional[str] = None
    item_requests: Optional[Sequence[ItemRequest]] = None
    container_type_id: Any = None

    @property
    def requires_resimulation(self) -> bool:
        return self.item_requests is not None or self.container_type_id is not None


def resolve_requests(
    catalog: Catalog, item_requests: Sequence[ItemRequest]
) -> List[ResolvedRequest]:
    resolved: List[ResolvedRequest] = []
    for request in item_requests:
        if request.quantity < 0:
            raise InvalidQuantity(request.quantity)
        item_type = catalog.get_item_type(request.item_type_id)
        if item_type is None:
            raise NotFound("Item type", request.item_type_id)
        resolved.append(ResolvedRequest(item_type, request.quantity))
    return resolved


def summarize_load(
    load: ContainerLoad, container_type: ContainerType
) -> ContainerSummary:
    return ContainerSummary(
        index=load.index,
        usage=measure(load, container_type),
        running_volume=load.running_volume,
        running_weight=load.running_weight,
        groups=list(load.groups.values()),
    )


def compute_calculation(
    catalog: Catalog,
    item_requests: Sequence[ItemRequest],
    container_type_id: Any,
    label: str,
) -> CalculationResult:
    resolved = resolve_requests(catalog, item_requests)

    container_type = catalog.get_container_type(container_type_id)
    if container_type is None:
        raise NotFound("Container type", container_type_id)

    total_volume = sum(r.item_type.volume * r.quantity for r in resolved)
    total_weight = sum(r.item_type.weight * r.quantity for r in resolved)

    containers: List[ContainerSummary] = []
    batches: List[List[Recommendation]] = []
    for load in simulate(container_type, resolved):
        summary = summarize_load(load, container_type)
        if summary.usage.utilization < 100:
            batches.append(
                recommend(
                    catalog,
                    summary.usage.remaining_volume,
                    summary.usage.remaining_weight,
                )
            )
        containers.append(summary)

    result = CalculationResult(
        label=label,
        container_type=container_type,
        requests=tuple(resolved),
        total_volume=total_volume,
        total_weight=total_weight,
        containers=tuple(containers),
        recommendations=tuple(merge_recommendations(batches)),
    )
    logger.info(
        f"Calculation '{label}': {result.calculated_containers} container(s), "
        f"utilization {result.utilization:.1f}%"
    )
    return result


def apply_update(
    catalog: Catalog, prior: CalculationResult, patch: CalculationPatch
) -> CalculationResult:
    """
    Apply a partial update to a prior result.

    Supplying item requests or a container type re-runs the whole calculation
    with the patched inputs merged over the prior ones. Label and status
    changes alone keep the prior packing.
    """
    label = patch.label if patch.label is not None else prior.label
    status = (
        CalculationStatus(patch.status) if patch.status is not None else prior.status
    )

    if not patch.requires_resimulation:
        return replace(prior, label=label, status=status)

    result = compute_calculation(
        catalog,
        patch.item_requests if patch.item_requests is not None else prior.item_requests,
        patch.container_type_id
        if patch.container_type_id is not None
        else prior.container_type.id,
        label,
    )
    return replace(result, status=status)
