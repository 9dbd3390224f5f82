"""
Vehicle stays table — one row per entry/exit cycle of a plate.
Rows are keyed by (plate, entry_time) so re-entering an exited plate appends
a new stay instead of overwriting the previous one.
"""

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, UniqueConstraint, text
from parking_ledger.database import Base


class VehicleStay(Base):
    __tablename__ = "vehicle_stays"
    __table_args__ = (
        UniqueConstraint("plate", "entry_time", name="uq_vehicle_stays_plate_entry"),
        # At most one active stay per plate, enforced by the database itself
        Index(
            "uq_vehicle_stays_active_plate", "plate", unique=True,
            sqlite_where=text("active"), postgresql_where=text("active"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate = Column(String(7), nullable=False, index=True)
    vehicle_class = Column(String(20), nullable=False)   # CAR | MOTORCYCLE
    entry_time = Column(DateTime, nullable=False, index=True)
    exit_time = Column(DateTime)                         # null while parked
    active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<VehicleStay {self.id} plate={self.plate} active={self.active}>"
