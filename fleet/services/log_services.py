"""
Append-only cost logs: fuel, maintenance and other expenses.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from fleet.exceptions import NotFound, PreconditionFailed, ValidationFailed, StoreFailure
from fleet.models import Vehicle, Trip, FuelLog, MaintenanceLog, Expense
from fleet.services import status_services
from fleet.services.types import Principal

logger = logging.getLogger(__name__)


def _get_vehicle(vehicle_id, for_update=False) -> Vehicle:
    queryset = Vehicle.objects.select_for_update() if for_update else Vehicle.objects.all()
    vehicle = queryset.filter(pk=vehicle_id).first()
    if vehicle is None:
        raise NotFound("Vehicle not found", code='vehicle_not_found')
    return vehicle


def log_fuel(principal: Principal, vehicle_id, liters: Decimal, cost: Decimal,
             date: Optional[datetime] = None, trip_id=None) -> FuelLog:
    vehicle = _get_vehicle(vehicle_id)
    trip = None
    if trip_id is not None:
        trip = Trip.objects.filter(pk=trip_id).first()
        if trip is None:
            raise NotFound("Trip not found", code='trip_not_found')
        if trip.vehicle_id != vehicle.pk:
            raise ValidationFailed("Trip belongs to a different vehicle", code='trip_vehicle_mismatch')

    try:
        fuel_log = FuelLog.objects.create(
            vehicle=vehicle,
            trip=trip,
            liters=liters,
            cost=cost,
            date=date or timezone.now(),
        )
    except DatabaseError as e:
        logger.error(f"Failed to record fuel for vehicle {vehicle.pk}: {e}", exc_info=True)
        raise StoreFailure("Fuel log could not be saved") from e

    logger.info(f"Fuel log {fuel_log.pk} recorded by {principal}: vehicle={vehicle.pk} liters={liters} cost={cost}")
    return fuel_log


def log_maintenance(principal: Principal, vehicle_id, description: str, cost: Optional[Decimal] = None,
                    performed_at: Optional[datetime] = None) -> MaintenanceLog:
    """
    Record maintenance and put the vehicle in the shop, in one transaction.

    A vehicle on an active trip cannot go to the shop. Retired vehicles keep
    their OUT_OF_SERVICE status; only the log is recorded.
    """
    try:
        with transaction.atomic():
            vehicle = _get_vehicle(vehicle_id, for_update=True)
            if vehicle.status == Vehicle.ON_TRIP:
                raise PreconditionFailed("Vehicle is on an active trip", code='vehicle_on_trip')

            maintenance_log = MaintenanceLog.objects.create(
                vehicle=vehicle,
                description=description,
                cost=cost,
                performed_at=performed_at or timezone.now(),
            )
            if vehicle.status != Vehicle.OUT_OF_SERVICE:
                status_services.mark_vehicle_in_shop(vehicle)
    except DatabaseError as e:
        logger.error(f"Failed to record maintenance for vehicle {vehicle_id}: {e}", exc_info=True)
        raise StoreFailure("Maintenance log could not be saved") from e

    logger.info(f"Maintenance log {maintenance_log.pk} recorded by {principal}; vehicle {vehicle.pk} is {vehicle.status}")
    return maintenance_log


def log_expense(principal: Principal, vehicle_id, description: str, amount: Decimal,
                date: Optional[datetime] = None) -> Expense:
    vehicle = _get_vehicle(vehicle_id)
    try:
        expense = Expense.objects.create(
            vehicle=vehicle,
            description=description,
            amount=amount,
            date=date or timezone.now(),
        )
    except DatabaseError as e:
        logger.error(f"Failed to record expense for vehicle {vehicle.pk}: {e}", exc_info=True)
        raise StoreFailure("Expense could not be saved") from e

    logger.info(f"Expense {expense.pk} recorded by {principal}: vehicle={vehicle.pk} amount={amount}")
    return expense
