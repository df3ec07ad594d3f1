"""
Cost aggregation over fuel, maintenance, expense and completed-trip records.

Sums are kept as unrounded Decimals; rounding happens only when the report
objects are built. Missing data never raises: absent sums are zero and
undefined ratios are None.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Hashable

from django.conf import settings
from django.db.models import Count
from django.utils import timezone

from analytics.constants import MONTH_KEY_FORMAT, DEFAULT_UTILIZATION_WINDOW_DAYS
from analytics.types import (
    VehicleMetric, MonthlyFinancial, FleetSummary, round_money, round_percent
)
from fleet.models import Vehicle, Cargo, Trip, FuelLog, MaintenanceLog, Expense

logger = logging.getLogger(__name__)

ZERO = Decimal('0')
HUNDRED = Decimal('100')


@dataclass
class _Totals:
    fuel_cost: Decimal = ZERO
    fuel_liters: Decimal = ZERO
    maintenance_cost: Decimal = ZERO
    other_expense: Decimal = ZERO
    revenue: Decimal = ZERO
    distance_km: int = 0
    trip_count: int = 0

    @property
    def operational_cost(self) -> Decimal:
        return self.fuel_cost + self.maintenance_cost + self.other_expense

    @property
    def net_profit(self) -> Decimal:
        return self.revenue - self.operational_cost

    @property
    def fuel_efficiency(self) -> Optional[Decimal]:
        if self.fuel_liters > 0:
            return Decimal(self.distance_km) / self.fuel_liters
        return None


def trip_distance(start_km: Optional[int], end_km: Optional[int]) -> Optional[int]:
    """Kilometers driven, or None unless both odometer readings are present."""
    if start_km is None or end_km is None:
        return None
    return end_km - start_km


def roi_percent(revenue: Decimal, cost: Decimal, acquisition_cost: Optional[Decimal]) -> Optional[Decimal]:
    if acquisition_cost is None or acquisition_cost <= 0:
        return None
    return (revenue - cost) / acquisition_cost * HUNDRED


def month_key(moment: datetime) -> str:
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    return moment.strftime(MONTH_KEY_FORMAT)


class CostAggregationEngine:
    """
    Builds per-vehicle metrics, monthly financials and the fleet summary
    from the current store contents.
    """

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or timezone.now()
        self.utilization_window_days = getattr(
            settings, 'FLEET_UTILIZATION_WINDOW_DAYS', DEFAULT_UTILIZATION_WINDOW_DAYS
        )

    def _accumulate(self, fuel_key: Callable, maintenance_key: Callable,
                    expense_key: Callable, trip_key: Callable) -> Dict[Hashable, _Totals]:
        """
        Fold every cost record and completed trip into ``_Totals`` buckets.
        Each ``*_key`` callable maps one row to its bucket key.
        """
        totals = defaultdict(_Totals)

        for row in FuelLog.objects.values('vehicle_id', 'date', 'cost', 'liters').order_by():
            bucket = totals[fuel_key(row)]
            bucket.fuel_cost += row['cost'] or ZERO
            bucket.fuel_liters += row['liters'] or ZERO

        for row in MaintenanceLog.objects.values('vehicle_id', 'performed_at', 'cost').order_by():
            totals[maintenance_key(row)].maintenance_cost += row['cost'] or ZERO

        for row in Expense.objects.values('vehicle_id', 'date', 'amount').order_by():
            totals[expense_key(row)].other_expense += row['amount'] or ZERO

        completed = Trip.objects.filter(status=Trip.COMPLETED).values(
            'vehicle_id', 'created_at', 'completed_at', 'start_odometer_km', 'end_odometer_km', 'revenue'
        ).order_by()
        for row in completed:
            bucket = totals[trip_key(row)]
            bucket.trip_count += 1
            bucket.revenue += row['revenue'] or ZERO
            distance = trip_distance(row['start_odometer_km'], row['end_odometer_km'])
            if distance is not None:
                bucket.distance_km += distance

        return totals

    def _totals_by_vehicle(self) -> Dict[int, _Totals]:
        by_vehicle = lambda row: row['vehicle_id']
        return self._accumulate(by_vehicle, by_vehicle, by_vehicle, by_vehicle)

    def _active_vehicles(self):
        return Vehicle.objects.exclude(status=Vehicle.OUT_OF_SERVICE).order_by('id')

    def vehicle_metrics(self, include_retired: bool = False) -> List[VehicleMetric]:
        """
        One metric per vehicle, ordered by id. OUT_OF_SERVICE vehicles are
        left out of the fleet list unless ``include_retired`` is set.
        """
        totals = self._totals_by_vehicle()
        vehicles = Vehicle.objects.order_by('id') if include_retired else self._active_vehicles()
        metrics = []
        for vehicle in vehicles:
            vehicle_totals = totals.get(vehicle.pk) or _Totals()
            raw_roi = roi_percent(vehicle_totals.revenue, vehicle_totals.operational_cost, vehicle.acquisition_cost)
            metrics.append(VehicleMetric(
                vehicle_id=vehicle.pk,
                name=vehicle.name,
                license_plate=vehicle.license_plate,
                status=vehicle.status,
                total_fuel_cost=round_money(vehicle_totals.fuel_cost),
                total_fuel_liters=round_money(vehicle_totals.fuel_liters),
                distance_km=vehicle_totals.distance_km,
                fuel_efficiency_km_per_l=round_percent(vehicle_totals.fuel_efficiency),
                total_maintenance_cost=round_money(vehicle_totals.maintenance_cost),
                total_other_expense=round_money(vehicle_totals.other_expense),
                total_operational_cost=round_money(vehicle_totals.operational_cost),
                revenue=round_money(vehicle_totals.revenue),
                completed_trips=vehicle_totals.trip_count,
                acquisition_cost=round_money(vehicle.acquisition_cost),
                roi_percent=round_percent(raw_roi),
                raw_roi_percent=raw_roi,
            ))
        return metrics

    def monthly_financials(self) -> List[MonthlyFinancial]:
        """
        Month buckets (YYYY-MM) over every vehicle, retired ones included.

        Logs fall in the month of their own date; completed trips in the month
        they completed, or were created when ``completed_at`` is missing.
        Only months with at least one record appear, oldest first.
        """
        totals = self._accumulate(
            fuel_key=lambda row: month_key(row['date']),
            maintenance_key=lambda row: month_key(row['performed_at']),
            expense_key=lambda row: month_key(row['date']),
            trip_key=lambda row: month_key(row['completed_at'] or row['created_at']),
        )

        return [
            MonthlyFinancial(
                month=month,
                revenue=round_money(bucket.revenue),
                fuel_cost=round_money(bucket.fuel_cost),
                fuel_liters=round_money(bucket.fuel_liters),
                maintenance_cost=round_money(bucket.maintenance_cost),
                other_expense=round_money(bucket.other_expense),
                total_operational_cost=round_money(bucket.operational_cost),
                net_profit=round_money(bucket.net_profit),
                trip_count=bucket.trip_count,
                distance_km=bucket.distance_km,
                fuel_efficiency_km_per_l=round_percent(bucket.fuel_efficiency),
            )
            for month, bucket in sorted(totals.items())
        ]

    def utilization_rate_percent(self) -> Decimal:
        """
        Share of active vehicles with a trip completed in the trailing window.
        An empty fleet is 0% utilized.
        """
        active = self._active_vehicles()
        active_count = active.count()
        if active_count == 0:
            return round_percent(ZERO)

        window_start = self.now - timedelta(days=self.utilization_window_days)
        used = (Trip.objects
                .filter(status=Trip.COMPLETED,
                        completed_at__gte=window_start,
                        completed_at__lte=self.now,
                        vehicle__in=active)
                .values('vehicle_id')
                .distinct()
                .count())
        return round_percent(Decimal(used) / Decimal(active_count) * HUNDRED)

    def fleet_summary(self) -> FleetSummary:
        totals = self._totals_by_vehicle()
        active = list(self._active_vehicles())

        revenue = cost = acquisition = ZERO
        for vehicle in active:
            vehicle_totals = totals.get(vehicle.pk) or _Totals()
            revenue += vehicle_totals.revenue
            cost += vehicle_totals.operational_cost
            acquisition += vehicle.acquisition_cost or ZERO

        status_counts = dict(
            Vehicle.objects.order_by().values('status').annotate(count=Count('id')).values_list('status', 'count')
        )
        for status, _ in Vehicle.STATUS_CHOICES:
            status_counts.setdefault(status, 0)

        fleet_roi = roi_percent(revenue, cost, acquisition)
        summary = FleetSummary(
            active_vehicle_count=len(active),
            status_counts=status_counts,
            completed_trip_count=Trip.objects.filter(status=Trip.COMPLETED).count(),
            pending_cargo_count=Cargo.objects.filter(assigned_trip__isnull=True).count(),
            total_revenue=round_money(revenue),
            total_operational_cost=round_money(cost),
            net_profit=round_money(revenue - cost),
            fleet_roi_percent=round_percent(fleet_roi),
            utilization_rate_percent=self.utilization_rate_percent(),
        )
        logger.debug(f"Fleet summary computed at {self.now.isoformat()}: {len(active)} active vehicles")
        return summary
