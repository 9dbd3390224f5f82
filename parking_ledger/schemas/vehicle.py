# parking_ledger/schemas/vehicle.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from parking_ledger.domain.vehicle import VehicleClass, PLATE_MIN_LENGTH, PLATE_MAX_LENGTH


class VehicleEntryIn(BaseModel):
    plate: str = Field(..., min_length=PLATE_MIN_LENGTH, max_length=PLATE_MAX_LENGTH,
                       pattern=r"^[A-Za-z0-9]+$", examples=["ABC123"])
    vehicle_class: VehicleClass


class VehicleOut(BaseModel):
    plate: str
    vehicle_class: VehicleClass
    entry_time: datetime
    exit_time: Optional[datetime]
    active: bool
    cost: Optional[int] = None   # set on exit only

    class Config:
        from_attributes = True


class CostOut(BaseModel):
    plate: str
    vehicle_class: VehicleClass
    hours: int
    rate_per_hour: int
    cost: int
