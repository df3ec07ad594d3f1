from .vehicle import VehicleSerializer
from .driver import DriverSerializer, DriverStatusSerializer
from .cargo import CargoSerializer
from .trip import TripSerializer, TripCreateSerializer, TripTransitionSerializer
from .logs import FuelLogSerializer, MaintenanceLogSerializer, ExpenseSerializer
