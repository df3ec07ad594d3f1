from django.utils import timezone

from fleet.exceptions import PreconditionFailed, ValidationFailed
from fleet.models import Vehicle, Driver


def update_vehicle_status(vehicle: Vehicle, new_status: str):
    vehicle.status = new_status
    vehicle.updated_at = timezone.now()
    vehicle.save(update_fields=['status', 'updated_at'])


def mark_vehicle_available(vehicle: Vehicle):
    update_vehicle_status(vehicle, Vehicle.AVAILABLE)


def mark_vehicle_on_trip(vehicle: Vehicle):
    update_vehicle_status(vehicle, Vehicle.ON_TRIP)


def mark_vehicle_in_shop(vehicle: Vehicle):
    update_vehicle_status(vehicle, Vehicle.IN_SHOP)


def mark_vehicle_out_of_service(vehicle: Vehicle):
    update_vehicle_status(vehicle, Vehicle.OUT_OF_SERVICE)


def return_vehicle_from_trip(vehicle: Vehicle, odometer_km: int):
    """Make the vehicle available again and record its new odometer reading."""
    vehicle.status = Vehicle.AVAILABLE
    vehicle.odometer_km = odometer_km
    vehicle.updated_at = timezone.now()
    vehicle.save(update_fields=['status', 'odometer_km', 'updated_at'])


def update_driver_status(driver: Driver, new_status: str):
    driver.status = new_status
    driver.updated_at = timezone.now()
    driver.save(update_fields=['status', 'updated_at'])


def mark_driver_available(driver: Driver):
    update_driver_status(driver, Driver.AVAILABLE)


def mark_driver_on_duty(driver: Driver):
    update_driver_status(driver, Driver.ON_DUTY)


# Manual status edits. ON_TRIP / ON_DUTY belong to the trip lifecycle and
# can neither be set nor cleared from here.

def release_vehicle_from_shop(vehicle: Vehicle):
    if vehicle.status != Vehicle.IN_SHOP:
        raise PreconditionFailed("Vehicle is not in the shop", code='vehicle_not_in_shop')
    mark_vehicle_available(vehicle)


def retire_vehicle(vehicle: Vehicle):
    if vehicle.status == Vehicle.ON_TRIP:
        raise PreconditionFailed("Vehicle is on an active trip", code='vehicle_on_trip')
    mark_vehicle_out_of_service(vehicle)


def change_driver_status(driver: Driver, new_status: str):
    valid_statuses = dict(Driver.STATUS_CHOICES).keys()
    if new_status not in valid_statuses:
        raise ValidationFailed(f"Invalid status. Must be one of {list(valid_statuses)}", code='invalid_status')
    if new_status == Driver.ON_DUTY:
        raise PreconditionFailed("Drivers go on duty only by dispatching a trip", code='driver_status_managed')
    if driver.status == Driver.ON_DUTY:
        raise PreconditionFailed("Driver is on an active trip", code='driver_on_trip')
    update_driver_status(driver, new_status)
