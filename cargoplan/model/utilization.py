from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .entities import ContainerLoad, ContainerType


@dataclass(frozen=True)
class Utilization:
    volume_utilization: float
    weight_utilization: float
    remaining_volume: float
    remaining_weight: float

    @property
    def utilization(self) -> float:
        """The binding constraint wins."""
        return max(self.volume_utilization, self.weight_utilization)


def _percent(used: float, capacity: float) -> float:
    if capacity <= 0:
        return 0.0
    return used / capacity * 100


def remaining_capacity(
    used_volume: float,
    used_weight: float,
    container_volume: float,
    weight_capacity: float,
) -> Tuple[float, float]:
    return (
        max(0.0, container_volume - used_volume),
        max(0.0, weight_capacity - used_weight),
    )


def measure(load: ContainerLoad, container_type: ContainerType) -> Utilization:
    remaining_volume, remaining_weight = remaining_capacity(
        load.running_volume,
        load.running_weight,
        container_type.volume,
        container_type.weight_capacity,
    )
    return Utilization(
        volume_utilization=_percent(load.running_volume, container_type.volume),
        weight_utilization=_percent(load.running_weight, container_type.weight_capacity),
        remaining_volume=remaining_volume,
        remaining_weight=remaining_weight,
    )
