from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .allocator import SpaceAllocator
from .entities import (
    EPS,
    ContainerLoad,
    ContainerType,
    ItemGroup,
    ItemType,
    PlacedItem,
    Position,
    PositionPattern,
    ResolvedRequest,
    placement_key,
)
from .errors import OversizedItem

logger = logging.getLogger(__name__)


def check_item_fits(item_type: ItemType, container_type: ContainerType) -> None:
    if (
        item_type.volume > container_type.volume + EPS
        or item_type.weight > container_type.weight_capacity + EPS
        or any(
            dim > limit + EPS
            for dim, limit in zip(item_type.extents, container_type.extents)
        )
    ):
        raise OversizedItem(item_type)


def grid_capacity(
    container_type: ContainerType, item_type: ItemType
) -> Tuple[int, int, int]:
    return tuple(
        max(1, math.floor(limit / dim + EPS)) if dim > 0 else 1
        for dim, limit in zip(item_type.extents, container_type.extents)
    )


def calculate_end(
    start: Position,
    count: int,
    grid: Tuple[int, int, int],
    item_type: ItemType,
) -> Position:
    """Position of the ``count``-th unit on a column-major grid (x fastest)."""
    index = count - 1
    gx, gy, _ = grid
    x_index = index % gx
    y_index = (index // gx) % gy
    z_index = index // (gx * gy)
    dx, dy, dz = item_type.extents
    return (
        start[0] + x_index * dx,
        start[1] + y_index * dy,
        start[2] + z_index * dz,
    )


class PackingSimulator:
    """
    Greedy first-fit loader for a single container type.

    Units are consumed one at a time in request order. Each unit goes to the
    first free space of the current container that holds it without breaking
    the volume or weight capacity; otherwise a fresh container is opened.
    """

    def __init__(self, container_type: ContainerType) -> None:
        self.container_type = container_type
        self.loads: List[ContainerLoad] = []
        self._allocator: Optional[SpaceAllocator] = None

    def _open_container(self) -> ContainerLoad:
        self._allocator = SpaceAllocator(self.container_type)
        load = ContainerLoad(
            index=len(self.loads) + 1,
            container_type=self.container_type,
            free_spaces=self._allocator.spaces,
        )
        self.loads.append(load)
        if load.index > 1:
            logger.debug(f"Opened container {load.index} of type {self.container_type.name}")
        return load

    def _try_place(self, load: ContainerLoad, item_type: ItemType) -> bool:
        if (
            load.running_volume + item_type.volume > self.container_type.volume + EPS
            or load.running_weight + item_type.weight
            > self.container_type.weight_capacity + EPS
        ):
            return False

        dims = item_type.extents
        index = self._allocator.find(*dims)
        if index is None:
            return False

        space = self._allocator.place(index, *dims)
        load.placements.append(PlacedItem(item_type, space.origin, dims))
        group = load.groups.get(item_type.id)
        if group is None:
            group = load.groups[item_type.id] = ItemGroup(item_type)
        group.count += 1
        group.positions.append(space.origin)
        load.running_volume += item_type.volume
        load.running_weight += item_type.weight
        return True

    def run(self, requests: Sequence[ResolvedRequest]) -> List[ContainerLoad]:
        """Pack ``requests`` into fresh containers; earlier runs are left untouched."""
        self.loads = []
        self._allocator = None
        for request in requests:
            check_item_fits(request.item_type, self.container_type)

        load = self._open_container()
        for request in requests:
            for _ in range(request.quantity):
                if self._try_place(load, request.item_type):
                    continue
                load = self._open_container()
                if not self._try_place(load, request.item_type):
                    raise RuntimeError(
                        f"Item {request.item_type.name} rejected by an empty container"
                    )

        for load in self.loads:
            summarize_groups(load)

        logger.info(
            f"Packed {sum(r.quantity for r in requests)} units into "
            f"{len(self.loads)} x {self.container_type.name}"
        )
        return self.loads


def summarize_groups(load: ContainerLoad) -> None:
    for group in load.groups.values():
        group.positions.sort(key=placement_key)
        start = group.positions[0]
        grid = grid_capacity(load.container_type, group.item_type)
        group.grid_capacity = grid
        group.pattern = PositionPattern(
            start=start,
            end=calculate_end(start, group.count, grid, group.item_type),
            count=group.count,
        )


def simulate(
    container_type: ContainerType, requests: Iterable[ResolvedRequest]
) -> List[ContainerLoad]:
    return PackingSimulator(container_type).run(list(requests))
