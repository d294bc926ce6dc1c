from typing import Any, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cargoplan import models, schemas, utils
from cargoplan.model import entities
from cargoplan.model.calculator import (
    CalculationPatch,
    CalculationResult,
    CalculationStatus,
    compute_calculation,
)
from cargoplan.model.catalog import Catalog
from cargoplan.model.errors import NotFound


class SqlCatalog(Catalog):
    """Catalog backed by the item and container type tables."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_item_type(self, id: Any) -> Optional[entities.ItemType]:
        row = self.db.get(models.ItemType, id)
        return utils.to_item_type(row) if row else None

    def get_container_type(self, id: Any) -> Optional[entities.ContainerType]:
        row = self.db.get(models.ContainerType, id)
        return utils.to_container_type(row) if row else None

    def list_item_types(self) -> List[entities.ItemType]:
        return [utils.to_item_type(row) for row in read_item_type_rows(self.db)]


# ----ItemType-----
def read_item_type_rows(db: Session, skip=0, limit: int = None) -> list[models.ItemType]:
    return db.scalars(
        select(models.ItemType)
        .order_by(models.ItemType.item_type_id.asc())
        .offset(skip)
        .limit(limit)
    ).all()


def read_item_types(db: Session, skip=0, limit: int = None) -> list[schemas.ItemTypeBase]:
    return [
        schemas.ItemTypeBase.model_validate(row)
        for row in read_item_type_rows(db, skip, limit)
    ]


def count_item_types(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(models.ItemType))


def insert_item_type(db: Session, item_type: schemas.ItemTypeCreate) -> models.ItemType:
    new_item_type = models.ItemType(
        **item_type.model_dump(exclude={"item_type_id", "created_date"}),
    )
    db.add(new_item_type)
    return new_item_type


# ----ContainerType-----
def read_container_types(
    db: Session, skip=0, limit: int = None
) -> list[schemas.ContainerTypeBase]:
    results = db.scalars(
        select(models.ContainerType)
        .order_by(models.ContainerType.container_type_id.asc())
        .offset(skip)
        .limit(limit)
    ).all()
    return [schemas.ContainerTypeBase.model_validate(row) for row in results]


def count_container_types(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(models.ContainerType))


def insert_container_type(
    db: Session, container_type: schemas.ContainerTypeCreate
) -> models.ContainerType:
    new_container_type = models.ContainerType(
        **container_type.model_dump(exclude={"container_type_id", "created_date"}),
    )
    db.add(new_container_type)
    return new_container_type


# ----Calculation-----
def _write_result(calculation: models.Calculation, result: CalculationResult) -> None:
    calculation.label = result.label
    calculation.container_type_id = result.container_type.id
    calculation.calculated_containers = result.calculated_containers
    calculation.total_volume = result.total_volume
    calculation.total_weight = result.total_weight
    calculation.utilization = result.utilization
    calculation.calculation_items = [
        models.CalculationItem(item_type_id=r.item_type.id, qty=r.quantity)
        for r in result.requests
    ]


def save_calculation(db: Session, result: CalculationResult) -> models.Calculation:
    calculation = models.Calculation(status=result.status.value)
    _write_result(calculation, result)
    db.add(calculation)
    db.commit()
    db.refresh(calculation)
    return calculation


def get_calculation(db: Session, calculation_id: int) -> models.Calculation:
    calculation = db.get(models.Calculation, calculation_id)
    if not calculation:
        raise NotFound("Calculation", calculation_id)
    return calculation


def read_calculations(db: Session, skip=0, limit: int = None) -> list[schemas.CalculationRecord]:
    results = db.scalars(
        select(models.Calculation)
        .order_by(models.Calculation.calculation_id.asc())
        .offset(skip)
        .limit(limit)
    ).unique().all()
    return [schemas.CalculationRecord.model_validate(row) for row in results]


def read_planned_calculations(db: Session, label: str) -> list[schemas.CalculationRecord]:
    results = db.scalars(
        select(models.Calculation)
        .filter(
            models.Calculation.label == label,
            models.Calculation.status == CalculationStatus.planned.value,
        )
        .order_by(models.Calculation.calculation_id.asc())
    ).unique().all()
    return [schemas.CalculationRecord.model_validate(row) for row in results]


def update_calculation(
    db: Session, calculation_id: int, patch: CalculationPatch
) -> models.Calculation:
    """
    Apply a partial update to a stored calculation.

    Only a new item set or container type re-runs the packing; the stored
    inputs fill in whichever of the two the patch leaves out.
    """
    calculation = get_calculation(db, calculation_id)

    if patch.requires_resimulation:
        item_requests = patch.item_requests
        if item_requests is None:
            item_requests = [
                entities.ItemRequest(row.item_type_id, row.qty)
                for row in calculation.calculation_items
            ]
        container_type_id = (
            patch.container_type_id
            if patch.container_type_id is not None
            else calculation.container_type_id
        )
        result = compute_calculation(
            SqlCatalog(db),
            item_requests,
            container_type_id,
            patch.label if patch.label is not None else calculation.label,
        )
        _write_result(calculation, result)
    elif patch.label is not None:
        calculation.label = patch.label

    if patch.status is not None:
        calculation.status = CalculationStatus(patch.status).value

    db.commit()
    db.refresh(calculation)
    return calculation
