from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from .. import schemas, crud, utils
from ..logger import logger
from ..model.calculator import CalculationPatch, compute_calculation
from ..model.errors import CalculationError, NotFound

router = APIRouter(tags=["Calculations"])


def to_http_error(e: CalculationError) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.post("/calculate", response_model=schemas.CalculationResultResponse)
def calculate(payload: schemas.CalculationCreate, db: Session = Depends(get_db)):
    logger.info(f"calculate request: {payload.model_dump_json()}")
    try:
        result = compute_calculation(
            crud.SqlCatalog(db),
            utils.to_item_requests(payload.items),
            payload.container_type_id,
            payload.label,
        )
        return utils.calculation_result_schema(result)
    except CalculationError as e:
        logger.warning(f"Calculation rejected: {e}")
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"Unexpected error during calculation: {e}")
        raise HTTPException(
            status_code=500, detail=f"Unexpected error during calculation: {e}"
        )


@router.post("/", response_model=schemas.CalculationRecord, status_code=201)
def save_calculation(payload: schemas.CalculationCreate, db: Session = Depends(get_db)):
    try:
        result = compute_calculation(
            crud.SqlCatalog(db),
            utils.to_item_requests(payload.items),
            payload.container_type_id,
            payload.label,
        )
        calculation = crud.save_calculation(db, result)
        return schemas.CalculationRecord.model_validate(calculation)
    except CalculationError as e:
        logger.warning(f"Calculation rejected: {e}")
        raise to_http_error(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error during calculation: {e}")
        raise HTTPException(
            status_code=500, detail=f"Unexpected error during calculation: {e}"
        )


@router.get("/", response_model=list[schemas.CalculationRecord])
def read_calculations(skip: int = 0, limit: int = None, db: Session = Depends(get_db)):
    try:
        return crud.read_calculations(db, skip, limit)
    except Exception as e:
        logger.error(f"Error reading calculations: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/search", response_model=schemas.PlannedShipmentsResponse)
def search_planned_shipments(label: str, db: Session = Depends(get_db)):
    existing = crud.read_planned_calculations(db, label)
    if existing:
        return {
            "message": "A planned shipment already exists for this label.",
            "existing_calculations": existing,
        }
    return {
        "message": "No planned shipment found for this label. Proceed with new calculation."
    }


@router.put("/{calculation_id}", response_model=schemas.CalculationRecord)
def update_calculation(
    calculation_id: int,
    payload: schemas.CalculationUpdate,
    db: Session = Depends(get_db),
):
    patch = CalculationPatch(
        label=payload.label,
        status=payload.status.value if payload.status is not None else None,
        item_requests=utils.to_item_requests(payload.items)
        if payload.items is not None
        else None,
        container_type_id=payload.container_type_id,
    )
    try:
        calculation = crud.update_calculation(db, calculation_id, patch)
        return schemas.CalculationRecord.model_validate(calculation)
    except CalculationError as e:
        db.rollback()
        logger.warning(f"Calculation update rejected: {e}")
        raise to_http_error(e)
    except Exception as e:
        db.rollback()
        logger.error(f"Unexpected error during calculation update: {e}")
        raise HTTPException(status_code=500, detail=f"Error: {str(e)}")
