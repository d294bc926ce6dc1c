import numpy as np
import pandas as pd
from fastapi import APIRouter, Depends, File, UploadFile, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ..database import get_db
from .. import schemas, crud
from ..logger import logger

router = APIRouter(tags=["Item Types"])


@router.get("/", response_model=schemas.ItemTypesResponse)
def read_item_types(skip: int = 0, limit: int = None, db: Session = Depends(get_db)):
    try:
        return {
            "items": crud.read_item_types(db, skip, limit),
            "total_count": crud.count_item_types(db),
        }
    except Exception as e:
        logger.error(f"Error reading item types: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/", response_model=schemas.ItemTypeBase, status_code=201)
def create_item_type(item_type: schemas.ItemTypeCreate, db: Session = Depends(get_db)):
    try:
        new_item_type = crud.insert_item_type(db, item_type)
        db.commit()
        db.refresh(new_item_type)
        return schemas.ItemTypeBase.model_validate(new_item_type)
    except IntegrityError as e:
        logger.warning(f"Error during item type creation: {e.orig}")
        db.rollback()
        raise HTTPException(status_code=409, detail="Item type already exists.")


@router.post("/upload/", response_model=schemas.messageResponse)
def upload_item_types(file: UploadFile = File(...), db: Session = Depends(get_db)):
    if file.filename.endswith(".csv"):
        df = pd.read_csv(file.file)
    elif file.filename.endswith(".xlsx") or file.filename.endswith(".xls"):
        df = pd.read_excel(file.file)
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only CSV and Excel supported.",
        )

    df_replaced = df.replace({np.nan: None})
    rows = df_replaced.to_dict(orient="records")

    try:
        for row in rows:
            row_clean = {k: v for k, v in row.items() if v is not None}
            crud.insert_item_type(db, schemas.ItemTypeCreate(**row_clean))
        db.commit()
    except ValidationError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Invalid item type row: {e.errors()[0]['msg']}")
    except IntegrityError as e:
        logger.warning(f"Error during item type upload: {e.orig}")
        db.rollback()
        raise HTTPException(status_code=409, detail="Item type already exists.")

    logger.info(f"Uploaded {len(rows)} item types from {file.filename}")
    return {"message": f"{len(rows)} item types uploaded successfully!"}
