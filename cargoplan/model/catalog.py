from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from .entities import ContainerType, ItemType


class Catalog(ABC):
    """Read-only view of the item and container type catalog."""

    @abstractmethod
    def get_item_type(self, id: Any) -> Optional[ItemType]:
        pass

    @abstractmethod
    def get_container_type(self, id: Any) -> Optional[ContainerType]:
        pass

    @abstractmethod
    def list_item_types(self) -> List[ItemType]:
        pass


class InMemoryCatalog(Catalog):
    def __init__(
        self,
        item_types: Iterable[ItemType] = (),
        container_types: Iterable[ContainerType] = (),
    ) -> None:
        self._item_types: Dict[Any, ItemType] = {i.id: i for i in item_types}
        self._container_types: Dict[Any, ContainerType] = {
            c.id: c for c in container_types
        }

    def add_item_type(self, item_type: ItemType) -> None:
        self._item_types[item_type.id] = item_type

    def add_container_type(self, container_type: ContainerType) -> None:
        self._container_types[container_type.id] = container_type

    def get_item_type(self, id: Any) -> Optional[ItemType]:
        return self._item_types.get(id)

    def get_container_type(self, id: Any) -> Optional[ContainerType]:
        return self._container_types.get(id)

    def list_item_types(self) -> List[ItemType]:
        return list(self._item_types.values())
