"""
Trip lifecycle.

    DRAFT --dispatch--> DISPATCHED --complete--> COMPLETED
      |                     |
      +------cancel---------+--------cancel----> CANCELLED

Each transition is one ``transaction.atomic()`` unit covering the trip,
vehicle and driver writes. The trip status write is a compare-and-swap on
the status the transition started from, so of two requests racing on the
same trip only one commits; the loser gets ``InvalidTransition`` and its
transaction rolls back.
"""
import logging
from datetime import datetime
from typing import Optional

from django.db import DatabaseError, transaction
from django.utils import timezone

from fleet.exceptions import NotFound, PreconditionFailed, InvalidTransition, StoreFailure
from fleet.models import Vehicle, Driver, Cargo, Trip
from fleet.services import eligibility, status_services
from fleet.services.types import Principal, CreateTripRequest, TransitionTripRequest

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    Trip.DRAFT: (Trip.DISPATCHED, Trip.CANCELLED),
    Trip.DISPATCHED: (Trip.COMPLETED, Trip.CANCELLED),
    Trip.COMPLETED: (),
    Trip.CANCELLED: (),
}


class TripService:
    """
    Creates trips and moves them through their lifecycle.
    """

    def create_trip(self, principal: Principal, request: CreateTripRequest,
                    now: Optional[datetime] = None) -> Trip:
        """
        Create a DRAFT trip.

        Checks, in order: vehicle exists, driver exists, then the eligibility
        rules. A given cargo must exist and still be pending; it is linked to
        the trip in the same transaction that creates it. Vehicle and driver
        status are left alone.

        Raises:
            NotFound, PreconditionFailed, StoreFailure
        """
        now = now or timezone.now()

        vehicle = Vehicle.objects.filter(pk=request.vehicle_id).first()
        if vehicle is None:
            raise NotFound("Vehicle not found", code='vehicle_not_found')
        driver = Driver.objects.filter(pk=request.driver_id).first()
        if driver is None:
            raise NotFound("Driver not found", code='driver_not_found')

        failure = eligibility.first_failure(vehicle, driver, request.cargo_weight_kg, now)
        if failure is not None:
            logger.warning(f"Trip creation by {principal} rejected: {failure.code} "
                           f"(vehicle={vehicle.pk}, driver={driver.pk})")
            raise PreconditionFailed(failure.message, code=failure.code)

        cargo = None
        if request.cargo_id is not None:
            cargo = Cargo.objects.filter(pk=request.cargo_id).first()
            if cargo is None:
                raise NotFound("Cargo not found", code='cargo_not_found')
            if not cargo.is_pending:
                raise PreconditionFailed("Cargo is already assigned to a trip", code='cargo_already_assigned')

        try:
            with transaction.atomic():
                trip = Trip.objects.create(
                    vehicle=vehicle,
                    driver=driver,
                    cargo_weight_kg=request.cargo_weight_kg,
                    origin=request.origin,
                    destination=request.destination,
                    status=Trip.DRAFT,
                )
                if cargo is not None:
                    linked = Cargo.objects.filter(pk=cargo.pk, assigned_trip__isnull=True).update(assigned_trip=trip)
                    if linked != 1:
                        raise PreconditionFailed("Cargo is already assigned to a trip",
                                                 code='cargo_already_assigned')
        except DatabaseError as e:
            logger.error(f"Failed to create trip for vehicle {vehicle.pk}: {e}", exc_info=True)
            raise StoreFailure("Trip could not be saved") from e

        logger.info(f"Trip {trip.pk} created by {principal}: vehicle={vehicle.pk} driver={driver.pk} "
                    f"cargo_weight_kg={request.cargo_weight_kg}")
        return trip

    def transition_trip(self, principal: Principal, trip_id, request: TransitionTripRequest,
                        now: Optional[datetime] = None) -> Trip:
        """
        Move a trip to ``request.next_status``.

        Raises:
            NotFound: no such trip.
            InvalidTransition: unknown status, terminal trip, or a move the
                lifecycle does not allow. Nothing is written.
            PreconditionFailed: the dispatch-time eligibility re-check failed.
            StoreFailure: the transaction could not be committed.
        """
        now = now or timezone.now()
        target = request.next_status
        handlers = {
            Trip.DISPATCHED: self._dispatch,
            Trip.COMPLETED: self._complete,
            Trip.CANCELLED: self._cancel,
        }

        try:
            with transaction.atomic():
                trip = (Trip.objects.select_for_update()
                        .select_related('vehicle', 'driver')
                        .filter(pk=trip_id)
                        .first())
                if trip is None:
                    raise NotFound("Trip not found", code='trip_not_found')
                self._check_transition(trip, target)
                handlers[target](trip, request, now)
        except DatabaseError as e:
            logger.error(f"Failed to move trip {trip_id} to {target}: {e}", exc_info=True)
            raise StoreFailure("Trip transition could not be saved") from e

        logger.info(f"Trip {trip.pk} moved to {trip.status} by {principal}")
        return trip

    def dispatch(self, principal: Principal, trip_id, now: Optional[datetime] = None) -> Trip:
        return self.transition_trip(principal, trip_id, TransitionTripRequest(next_status=Trip.DISPATCHED), now=now)

    def complete(self, principal: Principal, trip_id, end_odometer_km=None, revenue=None,
                 now: Optional[datetime] = None) -> Trip:
        request = TransitionTripRequest(
            next_status=Trip.COMPLETED,
            end_odometer_km=end_odometer_km,
            revenue=revenue,
        )
        return self.transition_trip(principal, trip_id, request, now=now)

    def cancel(self, principal: Principal, trip_id, now: Optional[datetime] = None) -> Trip:
        return self.transition_trip(principal, trip_id, TransitionTripRequest(next_status=Trip.CANCELLED), now=now)

    @staticmethod
    def _check_transition(trip: Trip, target: str):
        if target not in dict(Trip.STATUS_CHOICES):
            raise InvalidTransition(f"Unknown trip status: {target}",
                                    current_status=trip.status, requested_status=target)
        if trip.is_terminal:
            raise InvalidTransition(f"Trip is already {trip.status}",
                                    current_status=trip.status, requested_status=target)
        if target not in ALLOWED_TRANSITIONS[trip.status]:
            raise InvalidTransition(f"Cannot move trip from {trip.status} to {target}",
                                    current_status=trip.status, requested_status=target)

    @staticmethod
    def _swap_status(trip: Trip, expected: str, new_status: str, now: datetime, **fields):
        updated = Trip.objects.filter(pk=trip.pk, status=expected).update(
            status=new_status, updated_at=now, **fields
        )
        if updated != 1:
            raise InvalidTransition("Trip was changed by another request",
                                    current_status=expected, requested_status=new_status)
        trip.status = new_status
        trip.updated_at = now
        for name, value in fields.items():
            setattr(trip, name, value)

    def _dispatch(self, trip: Trip, request: TransitionTripRequest, now: datetime):
        vehicle, driver = trip.vehicle, trip.driver

        # Re-check: the resources may have changed since the trip was drafted
        failure = eligibility.first_failure(vehicle, driver, trip.cargo_weight_kg, now)
        if failure is not None:
            logger.warning(f"Dispatch of trip {trip.pk} rejected: {failure.code}")
            raise PreconditionFailed(failure.message, code=failure.code)

        self._swap_status(trip, Trip.DRAFT, Trip.DISPATCHED, now, start_odometer_km=vehicle.odometer_km)
        status_services.mark_vehicle_on_trip(vehicle)
        status_services.mark_driver_on_duty(driver)

    def _complete(self, trip: Trip, request: TransitionTripRequest, now: datetime):
        vehicle, driver = trip.vehicle, trip.driver
        end_km = request.end_odometer_km if request.end_odometer_km is not None else vehicle.odometer_km

        if trip.start_odometer_km is not None and end_km < trip.start_odometer_km:
            logger.warning(f"Trip {trip.pk} completed with end odometer {end_km} km below "
                           f"start odometer {trip.start_odometer_km} km")

        fields = {'end_odometer_km': end_km, 'completed_at': now}
        if request.revenue is not None:
            fields['revenue'] = request.revenue

        self._swap_status(trip, Trip.DISPATCHED, Trip.COMPLETED, now, **fields)
        status_services.return_vehicle_from_trip(vehicle, end_km)
        status_services.mark_driver_available(driver)

    def _cancel(self, trip: Trip, request: TransitionTripRequest, now: datetime):
        previous = trip.status
        self._swap_status(trip, previous, Trip.CANCELLED, now)
        if previous == Trip.DISPATCHED:
            status_services.mark_vehicle_available(trip.vehicle)
            status_services.mark_driver_available(trip.driver)
