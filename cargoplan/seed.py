from sqlalchemy.orm import Session

from cargoplan import crud, models, schemas
from cargoplan.logger import logger

SAMPLE_ITEM_TYPES = [
    {"item_type_name": "Laptop", "item_length": 0.3, "item_width": 0.2, "item_height": 0.05, "item_weight": 2},
    {"item_type_name": "Monitor", "item_length": 0.5, "item_width": 0.1, "item_height": 0.4, "item_weight": 5},
    {"item_type_name": "Keyboard", "item_length": 0.4, "item_width": 0.15, "item_height": 0.03, "item_weight": 0.8},
    {"item_type_name": "Mouse", "item_length": 0.1, "item_width": 0.07, "item_height": 0.04, "item_weight": 0.1},
    {"item_type_name": "Printer", "item_length": 0.45, "item_width": 0.4, "item_height": 0.3, "item_weight": 8},
]

SAMPLE_CONTAINER_TYPES = [
    {"container_type_name": "Small Van", "load_length": 3, "load_width": 1.5, "load_height": 1.8, "load_weight": 1000},
    {"container_type_name": "Medium Truck", "load_length": 6, "load_width": 2.2, "load_height": 2.5, "load_weight": 5000},
    {"container_type_name": "Large Truck", "load_length": 12, "load_width": 2.5, "load_height": 2.7, "load_weight": 20000},
]


def seed_catalog(db: Session) -> bool:
    """Insert the sample catalog when both catalog tables are empty."""
    if crud.count_item_types(db) or crud.count_container_types(db):
        logger.info("Catalog already populated, skipping seed")
        return False

    for data in SAMPLE_ITEM_TYPES:
        crud.insert_item_type(db, schemas.ItemTypeCreate(**data))
    for data in SAMPLE_CONTAINER_TYPES:
        crud.insert_container_type(db, schemas.ContainerTypeCreate(**data))
    db.commit()
    logger.info(
        f"Seeded {len(SAMPLE_ITEM_TYPES)} item types and "
        f"{len(SAMPLE_CONTAINER_TYPES)} container types"
    )
    return True


if __name__ == "__main__":
    from cargoplan.database import SessionLocal, engine

    models.Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_catalog(db)
    finally:
        db.close()
