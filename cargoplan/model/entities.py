from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

EPS = 1e-6

# Local frame of a container: x runs along its length, y is vertical and z runs
# across its width. A unit of an item type occupies (length, height, width).
Position = Tuple[float, float, float]


def placement_key(position: Position) -> Tuple[float, float, float]:
    """Lower first, then back, then left: (y, z, x)."""
    x, y, z = position
    return (y, z, x)


@dataclass(frozen=True)
class ItemType:
    id: Any
    name: str
    length: float
    width: float
    height: float
    weight: float

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def extents(self) -> Tuple[float, float, float]:
        """Extents along the container frame (x, y, z)."""
        return (self.length, self.height, self.width)


@dataclass(frozen=True)
class ContainerType:
    id: Any
    name: str
    length: float
    width: float
    height: float
    weight_capacity: float

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height

    @property
    def extents(self) -> Tuple[float, float, float]:
        return (self.length, self.height, self.width)


@dataclass(frozen=True)
class ItemRequest:
    item_type_id: Any
    quantity: int


@dataclass(frozen=True)
class ResolvedRequest:
    item_type: ItemType
    quantity: int


@dataclass(frozen=True)
class FreeSpace:
    x: float
    y: float
    z: float
    width: float
    height: float
    depth: float

    @property
    def origin(self) -> Position:
        return (self.x, self.y, self.z)

    def sort_key(self) -> Tuple[float, float, float]:
        return placement_key(self.origin)


@dataclass(frozen=True)
class PlacedItem:
    item_type: ItemType
    position: Position
    dims: Tuple[float, float, float]

    @property
    def bounds(self) -> Tuple[float, float, float, float, float, float]:
        x, y, z = self.position
        dx, dy, dz = self.dims
        return (x, y, z, x + dx, y + dy, z + dz)


@dataclass
class PositionPattern:
    start: Position
    end: Position
    count: int


@dataclass
class ItemGroup:
    item_type: ItemType
    count: int = 0
    positions: List[Position] = field(default_factory=list)
    pattern: Optional[PositionPattern] = None
    grid_capacity: Optional[Tuple[int, int, int]] = None

    @property
    def dimensions(self) -> Dict[str, float]:
        return {
            "length": self.item_type.length,
            "width": self.item_type.width,
            "height": self.item_type.height,
        }

    @property
    def weight(self) -> float:
        return self.item_type.weight


@dataclass
class ContainerLoad:
    index: int
    container_type: ContainerType
    placements: List[PlacedItem] = field(default_factory=list)
    groups: Dict[Any, ItemGroup] = field(default_factory=dict)
    running_volume: float = 0.0
    running_weight: float = 0.0
    free_spaces: List[FreeSpace] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.placements

    def quantities(self) -> Dict[Any, int]:
        return {type_id: group.count for type_id, group in self.groups.items()}
