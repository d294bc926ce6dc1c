from copy import deepcopy
from pydantic import BaseModel, Field, AliasChoices, create_model
from pydantic.fields import FieldInfo
from typing import Any, Optional
from datetime import datetime

from pydantic_core import PydanticUndefined
from cargoplan.model.calculator import CalculationStatus


def partial_model(model: type[BaseModel]):
    def make_field_optional(
        field: FieldInfo, default: Any = None
    ) -> tuple[Any, FieldInfo]:
        new = deepcopy(field)
        if default:
            new.default = default
        elif new.default is PydanticUndefined:
            new.default = None
        new.annotation = Optional[field.annotation]  # type: ignore
        return new.annotation, new

    return create_model(
        f"Partial{model.__name__}",
        __base__=model,
        __module__=model.__module__,
        **{
            field_name: make_field_optional(field_info)
            for field_name, field_info in model.model_fields.items()
        },
    )


class messageResponse(BaseModel):
    message: str


# ----ItemType-----
class ItemTypeBase(BaseModel):
    item_type_id: int
    item_type_name: str = Field(
        validation_alias=AliasChoices("item_type_name", "Name", "Item Name")
    )
    item_length: float = Field(
        gt=0, validation_alias=AliasChoices("item_length", "Length", "Length (m)")
    )
    item_width: float = Field(
        gt=0, validation_alias=AliasChoices("item_width", "Width", "Width (m)")
    )
    item_height: float = Field(
        gt=0, validation_alias=AliasChoices("item_height", "Height", "Height (m)")
    )
    item_weight: float = Field(
        ge=0, validation_alias=AliasChoices("item_weight", "Weight", "Weight (kg)")
    )
    color: Optional[str] = "#000000"
    created_by: Optional[str] = "system"
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class ItemTypeCreate(ItemTypeBase, BaseModel):
    item_type_id: Optional[int] = None

    class Config:
        str_strip_whitespace = True


class ItemTypesResponse(BaseModel):
    items: list[ItemTypeBase]
    total_count: int


# ----ContainerType-----
class ContainerTypeBase(BaseModel):
    container_type_id: int
    container_type_name: str = Field(
        validation_alias=AliasChoices("container_type_name", "Name", "Container Name")
    )
    load_length: float = Field(
        gt=0, validation_alias=AliasChoices("load_length", "Load Length", "Load Length (m)")
    )
    load_width: float = Field(
        gt=0, validation_alias=AliasChoices("load_width", "Load Width", "Load Width (m)")
    )
    load_height: float = Field(
        gt=0, validation_alias=AliasChoices("load_height", "Load Height", "Load Height (m)")
    )
    load_weight: float = Field(
        gt=0,
        validation_alias=AliasChoices(
            "load_weight", "Weight Capacity", "Load Weight", "Load Weight (kg)"
        ),
    )
    color: Optional[str] = "#000000"
    created_by: Optional[str] = "system"
    created_date: Optional[datetime] = None

    class Config:
        from_attributes = True
        populate_by_name = True


class ContainerTypeCreate(ContainerTypeBase, BaseModel):
    container_type_id: Optional[int] = None

    class Config:
        str_strip_whitespace = True


class ContainerTypesResponse(BaseModel):
    items: list[ContainerTypeBase]
    total_count: int


# ----Calculation request-----
class ItemQuantity(BaseModel):
    item_type_id: int
    quantity: int


class CalculationCreate(BaseModel):
    label: str
    items: list[ItemQuantity]
    container_type_id: int

    class Config:
        str_strip_whitespace = True


@partial_model
class CalculationUpdate(CalculationCreate, BaseModel):
    status: Optional[CalculationStatus] = None


# ----Calculation result-----
class Position(BaseModel):
    x: float
    y: float
    z: float


class GridCapacity(BaseModel):
    x: int
    y: int
    z: int


class Dimensions(BaseModel):
    length: float
    width: float
    height: float


class PositionPattern(BaseModel):
    start: Position
    end: Position
    count: int


class ItemGroupResponse(BaseModel):
    item_type_id: int
    item_type_name: str
    count: int
    dimensions: Dimensions
    weight: float
    position_pattern: PositionPattern
    grid_capacity: GridCapacity


class ContainerResult(BaseModel):
    container: int
    utilization: float
    volume_utilization: float
    weight_utilization: float
    total_volume: float
    total_weight: float
    remaining_volume: float
    remaining_weight: float
    item_groups: list[ItemGroupResponse]


class RequestedItem(BaseModel):
    item_type: ItemTypeBase
    quantity: int


class RecommendationResponse(BaseModel):
    item_type: ItemTypeBase
    max_quantity: int


class CalculationResultResponse(BaseModel):
    label: str
    status: CalculationStatus
    container_type: ContainerTypeBase
    items: list[RequestedItem]
    total_volume: float
    total_weight: float
    calculated_containers: int
    container_volume: float
    weight_capacity: float
    utilization: float
    containers: list[ContainerResult]
    recommendations: list[RecommendationResponse]


# ----Calculation history-----
class CalculationItemRecord(BaseModel):
    item_type: ItemTypeBase
    qty: int

    class Config:
        from_attributes = True


class CalculationRecord(BaseModel):
    calculation_id: int
    label: str
    status: CalculationStatus
    container_type: ContainerTypeBase
    calculation_items: list[CalculationItemRecord]
    calculated_containers: int
    total_volume: float
    total_weight: float
    utilization: float
    created_date: Optional[datetime] = None
    updated_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class PlannedShipmentsResponse(BaseModel):
    message: str
    existing_calculations: list[CalculationRecord] = []
