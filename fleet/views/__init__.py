from .vehicle import VehicleViewSet
from .driver import DriverViewSet
from .cargo import CargoViewSet
from .trip import TripViewSet
from .logs import FuelLogViewSet, MaintenanceLogViewSet, ExpenseViewSet
