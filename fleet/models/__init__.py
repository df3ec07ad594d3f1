# models/__init__.py
from .core import (
    Vehicle, Driver, Cargo,
    VEHICLE_TYPE_CHOICES, VEHICLE_TYPE_TRUCK, VEHICLE_TYPE_VAN, VEHICLE_TYPE_BIKE,
)
from .trip import Trip
from .logs import FuelLog, MaintenanceLog, Expense
