from datetime import datetime
from typing import List, Optional
from sqlalchemy import (
    String,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from cargoplan.model.calculator import CalculationStatus


class Base(DeclarativeBase):
    pass


class ItemType(Base):
    __tablename__ = "tbm_item_type"

    item_type_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    item_type_name: Mapped[str]
    item_length: Mapped[float]
    item_width: Mapped[float]
    item_height: Mapped[float]
    item_weight: Mapped[float]

    color: Mapped[str] = mapped_column(String(7), default="#000000")
    created_by: Mapped[Optional[str]]
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    __table_args__ = (Index("ux_item_type_name", "item_type_name", unique=True),)


class ContainerType(Base):
    __tablename__ = "tbm_container_type"

    container_type_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    container_type_name: Mapped[str]
    load_length: Mapped[float]
    load_width: Mapped[float]
    load_height: Mapped[float]
    load_weight: Mapped[float]

    color: Mapped[str] = mapped_column(String(7), default="#000000")
    created_by: Mapped[Optional[str]]
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    __table_args__ = (Index("ux_container_type_name", "container_type_name", unique=True),)


class Calculation(Base):
    __tablename__ = "tb_calculation"

    calculation_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    label: Mapped[str]
    container_type_id: Mapped[int] = mapped_column(
        ForeignKey("tbm_container_type.container_type_id")
    )
    calculated_containers: Mapped[int]
    total_volume: Mapped[float]
    total_weight: Mapped[float]
    utilization: Mapped[float]
    status: Mapped[str] = mapped_column(default=CalculationStatus.planned.value)

    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now()
    )

    container_type: Mapped[ContainerType] = relationship("ContainerType", lazy="joined")
    calculation_items: Mapped[List["CalculationItem"]] = relationship(
        "CalculationItem",
        back_populates="calculation",
        cascade="all, delete-orphan",
        order_by="CalculationItem.calculation_item_id",
    )

    __table_args__ = (Index("ix_calculation_label_status", "label", "status"),)


class CalculationItem(Base):
    __tablename__ = "tb_calculation_item"

    calculation_item_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    calculation_id: Mapped[int] = mapped_column(ForeignKey("tb_calculation.calculation_id"))
    item_type_id: Mapped[int] = mapped_column(ForeignKey("tbm_item_type.item_type_id"))
    qty: Mapped[int]

    calculation: Mapped["Calculation"] = relationship(
        "Calculation", back_populates="calculation_items"
    )
    item_type: Mapped[ItemType] = relationship("ItemType", lazy="joined")
