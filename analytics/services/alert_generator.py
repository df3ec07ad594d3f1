"""
On-demand operational alerts. Nothing here is persisted; every call
recomputes the alert list from the current data.
"""
import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional

from django.conf import settings
from django.utils import timezone

from analytics.constants import (
    LEVEL_CRITICAL, LEVEL_WARNING, LEVEL_RANK,
    DEFAULT_TRIP_OVERDUE_HOURS, DEFAULT_LICENSE_EXPIRY_WARNING_DAYS,
)
from analytics.services.cost_aggregation import CostAggregationEngine
from analytics.types import Alert, AlertReport, AlertSummary, round_percent
from fleet.models import Vehicle, Driver, Trip

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def days_until(moment: datetime, now: datetime) -> int:
    """Whole days left until ``moment``, rounded up and never negative."""
    return max(0, math.ceil((moment - now).total_seconds() / SECONDS_PER_DAY))


class AlertGenerator:
    def __init__(self, now: Optional[datetime] = None, engine: Optional[CostAggregationEngine] = None):
        self.now = now or timezone.now()
        self.engine = engine or CostAggregationEngine(now=self.now)
        self.overdue_hours = getattr(settings, 'FLEET_TRIP_OVERDUE_HOURS', DEFAULT_TRIP_OVERDUE_HOURS)
        self.license_warning_days = getattr(
            settings, 'FLEET_LICENSE_EXPIRY_WARNING_DAYS', DEFAULT_LICENSE_EXPIRY_WARNING_DAYS
        )

    def generate(self) -> AlertReport:
        """
        Collect every alert, critical first and newest first within a level.
        The summary is counted from the returned list.
        """
        alerts = []
        alerts.extend(self.overdue_trip_alerts())
        alerts.extend(self.license_expiry_alerts())
        alerts.extend(self.maintenance_alerts())
        alerts.extend(self.negative_roi_alerts())

        alerts.sort(key=lambda alert: alert.created_at, reverse=True)
        alerts.sort(key=lambda alert: LEVEL_RANK[alert.level])

        summary = AlertSummary.from_alerts(alerts)
        logger.info(f"Generated {summary.total} alerts ({summary.critical} critical, {summary.warning} warning)")
        return AlertReport(alerts=alerts, summary=summary)

    def overdue_trip_alerts(self) -> List[Alert]:
        cutoff = self.now - timedelta(hours=self.overdue_hours)
        trips = Trip.objects.filter(status=Trip.DISPATCHED, created_at__lt=cutoff).select_related('vehicle')
        return [
            Alert(
                id=f"trip-overdue-{trip.pk}",
                level=LEVEL_CRITICAL,
                title="Vehicle overdue on trip",
                message=f"{trip.vehicle.name} ({trip.vehicle.license_plate}) dispatch is overdue.",
                created_at=trip.created_at,
            )
            for trip in trips
        ]

    def license_expiry_alerts(self) -> List[Alert]:
        horizon = self.now + timedelta(days=self.license_warning_days)
        drivers = Driver.objects.filter(license_expiry__gte=self.now, license_expiry__lte=horizon)
        return [
            Alert(
                id=f"license-expiry-{driver.pk}",
                level=LEVEL_WARNING,
                title="License expiring soon",
                message=f"{driver.name} license expires in {days_until(driver.license_expiry, self.now)} day(s).",
                created_at=driver.license_expiry,
            )
            for driver in drivers
        ]

    def maintenance_alerts(self) -> List[Alert]:
        return [
            Alert(
                id=f"maintenance-active-{vehicle.pk}",
                level=LEVEL_WARNING,
                title="Maintenance request active",
                message=f"{vehicle.name} ({vehicle.license_plate}) is currently in shop.",
                created_at=vehicle.updated_at,
            )
            for vehicle in Vehicle.objects.filter(status=Vehicle.IN_SHOP)
        ]

    def negative_roi_alerts(self) -> List[Alert]:
        alerts = []
        # Retired vehicles keep their history, so they are checked too
        for metric in self.engine.vehicle_metrics(include_retired=True):
            # Compare the unrounded value: -0.04% still counts as negative
            if metric.raw_roi_percent is None or metric.raw_roi_percent >= 0:
                continue
            alerts.append(Alert(
                id=f"negative-roi-{metric.vehicle_id}",
                level=LEVEL_CRITICAL,
                title="Negative ROI detected",
                message=f"{metric.name} ({metric.license_plate}) has negative ROI "
                        f"({round_percent(metric.raw_roi_percent)}%).",
                created_at=self.now,
            ))
        return alerts
