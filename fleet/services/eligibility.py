"""
Eligibility rules for putting a vehicle, a driver and a load on a trip.

Every rule is a pure function of its inputs. Rules run in a fixed order so the
first failure, and therefore the message shown to the caller, is deterministic.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.utils import timezone

from fleet.models import Vehicle, Driver

VEHICLE_UNAVAILABLE = 'vehicle_unavailable'
DRIVER_UNAVAILABLE = 'driver_unavailable'
LICENSE_EXPIRED = 'license_expired'
VEHICLE_TYPE_NOT_AUTHORIZED = 'vehicle_type_not_authorized'
CAPACITY_EXCEEDED = 'capacity_exceeded'


@dataclass(frozen=True)
class EligibilityFailure:
    code: str
    message: str


def _format_kg(value) -> str:
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return str(int(amount))
    return str(amount.normalize())


def check_vehicle_available(vehicle, driver, cargo_weight_kg, now) -> Optional[EligibilityFailure]:
    if vehicle.status != Vehicle.AVAILABLE:
        return EligibilityFailure(VEHICLE_UNAVAILABLE, "Vehicle is not available")
    return None


def check_driver_available(vehicle, driver, cargo_weight_kg, now) -> Optional[EligibilityFailure]:
    if driver.status != Driver.AVAILABLE:
        return EligibilityFailure(DRIVER_UNAVAILABLE, "Driver is not available")
    return None


def check_license_valid(vehicle, driver, cargo_weight_kg, now) -> Optional[EligibilityFailure]:
    if not driver.license_valid_at(now):
        return EligibilityFailure(LICENSE_EXPIRED, "Driver license has expired")
    return None


def check_vehicle_type_authorized(vehicle, driver, cargo_weight_kg, now) -> Optional[EligibilityFailure]:
    if not driver.is_authorized_for(vehicle.vehicle_type):
        return EligibilityFailure(VEHICLE_TYPE_NOT_AUTHORIZED, "Driver not authorized for this vehicle type")
    return None


def check_capacity(vehicle, driver, cargo_weight_kg, now) -> Optional[EligibilityFailure]:
    weight = Decimal(str(cargo_weight_kg))
    capacity = Decimal(str(vehicle.max_load_capacity_kg))
    if weight > capacity:
        return EligibilityFailure(
            CAPACITY_EXCEEDED,
            f"Cargo weight ({_format_kg(weight)} kg) exceeds vehicle max capacity ({_format_kg(capacity)} kg)"
        )
    return None


RULES = (
    check_vehicle_available,
    check_driver_available,
    check_license_valid,
    check_vehicle_type_authorized,
    check_capacity,
)


def evaluate(vehicle, driver, cargo_weight_kg, now: Optional[datetime] = None) -> List[EligibilityFailure]:
    """Run every rule and return all failures, in rule order."""
    now = now or timezone.now()
    failures = []
    for rule in RULES:
        failure = rule(vehicle, driver, cargo_weight_kg, now)
        if failure is not None:
            failures.append(failure)
    return failures


def first_failure(vehicle, driver, cargo_weight_kg, now: Optional[datetime] = None) -> Optional[EligibilityFailure]:
    """Return the first failing rule, or None when the combination may start a trip."""
    now = now or timezone.now()
    for rule in RULES:
        failure = rule(vehicle, driver, cargo_weight_kg, now)
        if failure is not None:
            return failure
    return None
