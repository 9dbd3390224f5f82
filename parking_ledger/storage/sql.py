"""
SQLAlchemy storage adapter.
Maps VehicleRecord values to vehicle_stays rows and back. Every write commits
immediately; a violated active-plate index surfaces as DuplicateActiveVehicle.
"""

from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from parking_ledger.domain.vehicle import VehicleClass, VehicleRecord
from parking_ledger.exceptions import DuplicateActiveVehicle, StayConflict
from parking_ledger.models.vehicle_stay import VehicleStay
from parking_ledger.storage.base import VehicleStoragePort
from parking_ledger.utils.logger import get_logger

logger = get_logger(__name__)


def to_domain(row: VehicleStay) -> VehicleRecord:
    return VehicleRecord(
        plate=row.plate,
        vehicle_class=VehicleClass(row.vehicle_class),
        entry_time=row.entry_time,
        exit_time=row.exit_time,
        active=bool(row.active),
    )


class SqlVehicleStorage(VehicleStoragePort):
    def __init__(self, db: Session):
        self.db = db

    def save(self, record: VehicleRecord) -> VehicleRecord:
        plate = record.plate.upper()
        row = (
            self.db.query(VehicleStay)
            .filter(VehicleStay.plate == plate, VehicleStay.entry_time == record.entry_time)
            .first()
        )
        if row is None:
            row = VehicleStay(plate=plate, entry_time=record.entry_time)
            self.db.add(row)
        elif not row.active and record.active:
            logger.warning(f"[STORE] Refused to reopen finished stay for plate {plate}")
            raise StayConflict(f"Stay of {plate} entered at {record.entry_time} is already finished", plate=plate)
        row.vehicle_class = record.vehicle_class.value
        row.exit_time = record.exit_time
        row.active = record.active

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"[STORE] Rejected second active stay for plate {plate}")
            raise DuplicateActiveVehicle(f"Vehicle {plate} is already in the lot", plate=plate)

        self.db.refresh(row)
        return to_domain(row)

    def find_by_plate(self, plate: str) -> Optional[VehicleRecord]:
        row = (
            self.db.query(VehicleStay)
            .filter(VehicleStay.plate == plate.upper())
            .order_by(VehicleStay.active.desc(), VehicleStay.entry_time.desc(), VehicleStay.id.desc())
            .first()
        )
        return to_domain(row) if row else None

    def list_active(self) -> List[VehicleRecord]:
        rows = (
            self.db.query(VehicleStay)
            .filter(VehicleStay.active.is_(True))
            .order_by(VehicleStay.entry_time)
            .all()
        )
        return [to_domain(r) for r in rows]

    def list_all(self) -> List[VehicleRecord]:
        rows = self.db.query(VehicleStay).order_by(VehicleStay.entry_time, VehicleStay.id).all()
        return [to_domain(r) for r in rows]

    def delete_by_plate(self, plate: str) -> None:
        deleted = self.db.query(VehicleStay).filter(VehicleStay.plate == plate.upper()).delete()
        self.db.commit()
        logger.info(f"[STORE] Deleted {deleted} stay(s) for plate {plate.upper()}")
