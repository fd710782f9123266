from fastapi import APIRouter, Depends, HTTPException

from ..security import verify_api_key
from ..schemas.size import UserMeasurements
from ..services.storage import MeasurementStore


router = APIRouter(prefix="/measurements", tags=["measurements"], dependencies=[Depends(verify_api_key)])


@router.get("")
def get_measurements() -> UserMeasurements:
    saved = MeasurementStore().load()
    if saved is None:
        raise HTTPException(status_code=404, detail="No saved measurements")
    return saved


@router.put("")
def put_measurements(measurements: UserMeasurements) -> UserMeasurements:
    MeasurementStore().save(measurements)
    return measurements
