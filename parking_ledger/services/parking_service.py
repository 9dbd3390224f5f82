# parking_ledger/services/parking_service.py
"""
Parking ledger use cases: enter, exit, cost, list active, list history.

The service holds no state of its own. All persistence goes through the
VehicleStoragePort passed to the constructor; every fault propagates to the
caller unchanged and is raised before anything is written.
"""

from datetime import timedelta
from typing import List, Tuple
from parking_ledger.domain.vehicle import VehicleClass, VehicleRecord, normalize_plate
from parking_ledger.exceptions import DuplicateActiveVehicle, VehicleNotFound, VehicleStillParked
from parking_ledger.storage.base import VehicleStoragePort
from parking_ledger.utils.logger import get_logger

logger = get_logger(__name__)


class ParkingLedgerService:
    def __init__(self, storage: VehicleStoragePort):
        self.storage = storage

    def enter(self, plate: str, vehicle_class: VehicleClass) -> VehicleRecord:
        """Register a vehicle entering the lot. One active stay per plate."""
        existing = self.storage.find_by_plate(normalize_plate(plate)) if plate else None
        if existing and existing.active:
            logger.warning(f"[ENTRY] Plate={existing.plate} rejected — already in the lot")
            raise DuplicateActiveVehicle(
                f"Vehicle {existing.plate} is already in the lot", plate=existing.plate
            )

        # A new stay starts strictly after the previous one ended
        not_before = existing.exit_time + timedelta(microseconds=1) if existing else None
        record = VehicleRecord.create(plate, vehicle_class, not_before=not_before)
        saved = self.storage.save(record)
        logger.info(f"[ENTRY] Plate={saved.plate} | Class={saved.vehicle_class.value}")
        return saved

    def exit(self, plate: str) -> VehicleRecord:
        """Mark the active stay of a plate as finished."""
        plate = normalize_plate(plate)
        record = self.storage.find_by_plate(plate) if plate else None
        if record is None or not record.active:
            logger.warning(f"[EXIT] Plate={plate} not found in the lot")
            raise VehicleNotFound(f"Vehicle {plate} not found in the lot", plate=plate)

        saved = self.storage.save(record.mark_exit())
        logger.info(f"[EXIT] Plate={saved.plate} parked for {saved.duration().total_seconds() // 60:.0f} min")
        return saved

    def cost(self, plate: str) -> int:
        """Fee for the plate's most recent stay. Only defined once the vehicle has left."""
        return self.quote(plate)[1]

    def quote(self, plate: str) -> Tuple[VehicleRecord, int]:
        plate = normalize_plate(plate)
        record = self.storage.find_by_plate(plate) if plate else None
        if record is None:
            raise VehicleNotFound(f"Vehicle {plate} not found", plate=plate)
        if record.active:
            raise VehicleStillParked(
                f"Vehicle {plate} is still in the lot, final cost not available yet", plate=plate
            )
        return record, record.billable_hours() * record.vehicle_class.rate_per_hour

    def exit_with_cost(self, plate: str) -> Tuple[VehicleRecord, int]:
        record = self.exit(plate)
        return record, self.cost(record.plate)

    def list_active(self) -> List[VehicleRecord]:
        return self.storage.list_active()

    def list_history(self) -> List[VehicleRecord]:
        return self.storage.list_all()
