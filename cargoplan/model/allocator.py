from __future__ import annotations

from typing import List, Optional

from .entities import EPS, ContainerType, FreeSpace


def full_space(container_type: ContainerType) -> FreeSpace:
    length, height, width = container_type.extents
    return FreeSpace(0.0, 0.0, 0.0, length, height, width)


def fits(space: FreeSpace, width: float, height: float, depth: float) -> bool:
    return (
        space.width + EPS >= width
        and space.height + EPS >= height
        and space.depth + EPS >= depth
    )


def split_space(
    space: FreeSpace, width: float, height: float, depth: float
) -> List[FreeSpace]:
    """
    Residual spaces left after a unit is placed at the origin of ``space``.

    One residual per axis where the space is strictly larger than the unit,
    each spanning the full space on the other two axes. Residuals may overlap
    one another.
    """
    residuals: List[FreeSpace] = []

    if space.width - width > EPS:
        residuals.append(
            FreeSpace(
                space.x + width,
                space.y,
                space.z,
                space.width - width,
                space.height,
                space.depth,
            )
        )

    if space.height - height > EPS:
        residuals.append(
            FreeSpace(
                space.x,
                space.y + height,
                space.z,
                space.width,
                space.height - height,
                space.depth,
            )
        )

    if space.depth - depth > EPS:
        residuals.append(
            FreeSpace(
                space.x,
                space.y,
                space.z + depth,
                space.width,
                space.height,
                space.depth - depth,
            )
        )

    return [s for s in residuals if s.width > 0 and s.height > 0 and s.depth > 0]


class SpaceAllocator:
    """First-fit free-space tracker for a single container."""

    def __init__(self, container_type: ContainerType) -> None:
        self.container_type = container_type
        self.spaces: List[FreeSpace] = [full_space(container_type)]

    def __len__(self) -> int:
        return len(self.spaces)

    def find(self, width: float, height: float, depth: float) -> Optional[int]:
        for index, space in enumerate(self.spaces):
            if fits(space, width, height, depth):
                return index
        return None

    def place(self, index: int, width: float, height: float, depth: float) -> FreeSpace:
        """Consume ``self.spaces[index]`` and return it; residuals take its slot."""
        space = self.spaces[index]
        self.spaces[index : index + 1] = split_space(space, width, height, depth)
        self.spaces.sort(key=FreeSpace.sort_key)
        return space
