# parking_ledger/routers/parking.py
"""Parking lot endpoints — entry, exit, cost and listings."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from parking_ledger.database import get_db
from parking_ledger.schemas.error import ErrorOut
from parking_ledger.schemas.vehicle import CostOut, VehicleEntryIn, VehicleOut
from parking_ledger.services.parking_service import ParkingLedgerService
from parking_ledger.storage.sql import SqlVehicleStorage

router = APIRouter(prefix="/parking")


def get_parking_service(db: Session = Depends(get_db)) -> ParkingLedgerService:
    """FastAPI dependency — service bound to the request's DB session."""
    return ParkingLedgerService(SqlVehicleStorage(db))


@router.post("/entries", response_model=VehicleOut, status_code=status.HTTP_201_CREATED,
             responses={400: {"model": ErrorOut}, 409: {"model": ErrorOut}},
             summary="Register a vehicle entering the lot")
def enter_vehicle(body: VehicleEntryIn, service: ParkingLedgerService = Depends(get_parking_service)):
    return VehicleOut.model_validate(service.enter(body.plate, body.vehicle_class))


@router.put("/exits/{plate}", response_model=VehicleOut,
            responses={404: {"model": ErrorOut}, 409: {"model": ErrorOut}},
            summary="Mark a vehicle as exited and return its fee")
def exit_vehicle(plate: str, service: ParkingLedgerService = Depends(get_parking_service)):
    record, cost = service.exit_with_cost(plate)
    out = VehicleOut.model_validate(record)
    out.cost = cost
    return out


@router.get("/active", response_model=list[VehicleOut], summary="Vehicles currently in the lot")
def list_active(service: ParkingLedgerService = Depends(get_parking_service)):
    return [VehicleOut.model_validate(r) for r in service.list_active()]


@router.get("/history", response_model=list[VehicleOut], summary="Every recorded stay")
def list_history(service: ParkingLedgerService = Depends(get_parking_service)):
    return [VehicleOut.model_validate(r) for r in service.list_history()]


@router.get("/cost/{plate}", response_model=CostOut,
            responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}},
            summary="Fee for a vehicle's last finished stay")
def get_cost(plate: str, service: ParkingLedgerService = Depends(get_parking_service)):
    record, cost = service.quote(plate)
    return CostOut(
        plate=record.plate,
        vehicle_class=record.vehicle_class,
        hours=record.billable_hours(),
        rate_per_hour=record.vehicle_class.rate_per_hour,
        cost=cost,
    )
