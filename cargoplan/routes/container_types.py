from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ..database import get_db
from .. import schemas, crud
from ..logger import logger

router = APIRouter(tags=["Container Types"])


@router.get("/", response_model=schemas.ContainerTypesResponse)
def read_container_types(skip: int = 0, limit: int = None, db: Session = Depends(get_db)):
    try:
        return {
            "items": crud.read_container_types(db, skip, limit),
            "total_count": crud.count_container_types(db),
        }
    except Exception as e:
        logger.error(f"Error reading container types: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/", response_model=schemas.ContainerTypeBase, status_code=201)
def create_container_type(
    container_type: schemas.ContainerTypeCreate, db: Session = Depends(get_db)
):
    try:
        new_container_type = crud.insert_container_type(db, container_type)
        db.commit()
        db.refresh(new_container_type)
        return schemas.ContainerTypeBase.model_validate(new_container_type)
    except IntegrityError as e:
        logger.warning(f"Error during container type creation: {e.orig}")
        db.rollback()
        raise HTTPException(status_code=409, detail="Container type already exists.")
