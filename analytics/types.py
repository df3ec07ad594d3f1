"""
Report objects produced by the analytics services.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from analytics.constants import MONEY_QUANTUM, PERCENT_QUANTUM, LEVEL_CRITICAL, LEVEL_WARNING


def round_money(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def round_percent(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(value).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass
class VehicleMetric:
    """
    Cost and return figures for one vehicle. Money is rounded to cents and
    percentages/efficiency to one decimal; ``raw_roi_percent`` keeps the
    unrounded ROI for threshold checks.
    """
    vehicle_id: int
    name: str
    license_plate: str
    status: str
    total_fuel_cost: Decimal
    total_fuel_liters: Decimal
    distance_km: int
    fuel_efficiency_km_per_l: Optional[Decimal]
    total_maintenance_cost: Decimal
    total_other_expense: Decimal
    total_operational_cost: Decimal
    revenue: Decimal
    completed_trips: int
    acquisition_cost: Optional[Decimal]
    roi_percent: Optional[Decimal]
    raw_roi_percent: Optional[Decimal] = None


@dataclass
class MonthlyFinancial:
    month: str  # YYYY-MM
    revenue: Decimal
    fuel_cost: Decimal
    fuel_liters: Decimal
    maintenance_cost: Decimal
    other_expense: Decimal
    total_operational_cost: Decimal
    net_profit: Decimal
    trip_count: int
    distance_km: int
    fuel_efficiency_km_per_l: Optional[Decimal]


@dataclass
class FleetSummary:
    active_vehicle_count: int
    status_counts: Dict[str, int]
    completed_trip_count: int
    pending_cargo_count: int
    total_revenue: Decimal
    total_operational_cost: Decimal
    net_profit: Decimal
    fleet_roi_percent: Optional[Decimal]
    utilization_rate_percent: Decimal


@dataclass
class Alert:
    id: str
    level: str
    title: str
    message: str
    created_at: datetime


@dataclass
class AlertSummary:
    total: int = 0
    critical: int = 0
    warning: int = 0

    @staticmethod
    def from_alerts(alerts: List[Alert]) -> 'AlertSummary':
        return AlertSummary(
            total=len(alerts),
            critical=sum(1 for alert in alerts if alert.level == LEVEL_CRITICAL),
            warning=sum(1 for alert in alerts if alert.level == LEVEL_WARNING),
        )


@dataclass
class AlertReport:
    alerts: List[Alert] = field(default_factory=list)
    summary: AlertSummary = field(default_factory=AlertSummary)
