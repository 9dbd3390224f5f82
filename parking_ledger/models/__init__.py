# Parking Ledger — Database Models
# Import all models here for SQLAlchemy discovery

from parking_ledger.models.vehicle_stay import VehicleStay   # noqa
