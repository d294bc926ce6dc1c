from cargoplan import models, schemas
from cargoplan.model import entities
from cargoplan.model.calculator import CalculationResult, ContainerSummary
from cargoplan.model.entities import ItemGroup


def to_item_type(row: models.ItemType) -> entities.ItemType:
    return entities.ItemType(
        id=row.item_type_id,
        name=row.item_type_name,
        length=row.item_length,
        width=row.item_width,
        height=row.item_height,
        weight=row.item_weight,
    )


def to_container_type(row: models.ContainerType) -> entities.ContainerType:
    return entities.ContainerType(
        id=row.container_type_id,
        name=row.container_type_name,
        length=row.load_length,
        width=row.load_width,
        height=row.load_height,
        weight_capacity=row.load_weight,
    )


def item_type_schema(item_type: entities.ItemType) -> schemas.ItemTypeBase:
    return schemas.ItemTypeBase(
        item_type_id=item_type.id,
        item_type_name=item_type.name,
        item_length=item_type.length,
        item_width=item_type.width,
        item_height=item_type.height,
        item_weight=item_type.weight,
    )


def container_type_schema(container_type: entities.ContainerType) -> schemas.ContainerTypeBase:
    return schemas.ContainerTypeBase(
        container_type_id=container_type.id,
        container_type_name=container_type.name,
        load_length=container_type.length,
        load_width=container_type.width,
        load_height=container_type.height,
        load_weight=container_type.weight_capacity,
    )


def _position(position) -> schemas.Position:
    x, y, z = position
    return schemas.Position(x=x, y=y, z=z)


def item_group_schema(group: ItemGroup) -> schemas.ItemGroupResponse:
    gx, gy, gz = group.grid_capacity
    return schemas.ItemGroupResponse(
        item_type_id=group.item_type.id,
        item_type_name=group.item_type.name,
        count=group.count,
        dimensions=schemas.Dimensions(**group.dimensions),
        weight=group.weight,
        position_pattern=schemas.PositionPattern(
            start=_position(group.pattern.start),
            end=_position(group.pattern.end),
            count=group.pattern.count,
        ),
        grid_capacity=schemas.GridCapacity(x=gx, y=gy, z=gz),
    )


def container_schema(summary: ContainerSummary) -> schemas.ContainerResult:
    return schemas.ContainerResult(
        container=summary.index,
        utilization=summary.utilization,
        volume_utilization=summary.usage.volume_utilization,
        weight_utilization=summary.usage.weight_utilization,
        total_volume=summary.running_volume,
        total_weight=summary.running_weight,
        remaining_volume=summary.usage.remaining_volume,
        remaining_weight=summary.usage.remaining_weight,
        item_groups=[item_group_schema(g) for g in summary.groups],
    )


def calculation_result_schema(result: CalculationResult) -> schemas.CalculationResultResponse:
    return schemas.CalculationResultResponse(
        label=result.label,
        status=result.status,
        container_type=container_type_schema(result.container_type),
        items=[
            schemas.RequestedItem(
                item_type=item_type_schema(r.item_type), quantity=r.quantity
            )
            for r in result.requests
        ],
        total_volume=result.total_volume,
        total_weight=result.total_weight,
        calculated_containers=result.calculated_containers,
        container_volume=result.container_volume,
        weight_capacity=result.weight_capacity,
        utilization=result.utilization,
        containers=[container_schema(c) for c in result.containers],
        recommendations=[
            schemas.RecommendationResponse(
                item_type=item_type_schema(rec.item_type),
                max_quantity=rec.max_quantity,
            )
            for rec in result.recommendations
        ],
    )


def to_item_requests(items: list[schemas.ItemQuantity]) -> list[entities.ItemRequest]:
    return [entities.ItemRequest(i.item_type_id, i.quantity) for i in items]
