from datetime import datetime, timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from analytics.services.cost_aggregation import CostAggregationEngine, trip_distance
from fleet.models import Vehicle, Trip, FuelLog, MaintenanceLog, Expense
from fleet.tests.factories import make_vehicle, make_driver, make_cargo


def aware(year, month, day):
    return timezone.make_aware(datetime(year, month, day, 12, 0))


class CostAggregationTestBase(TestCase):

    def setUp(self):
        self.now = timezone.now()
        self.driver = make_driver()

    def completed_trip(self, vehicle, start_km=1000, end_km=1500, revenue=None, completed_at=None):
        return Trip.objects.create(
            vehicle=vehicle, driver=self.driver, cargo_weight_kg=Decimal('100'),
            origin="Colombo", destination="Kandy", status=Trip.COMPLETED,
            start_odometer_km=start_km, end_odometer_km=end_km,
            revenue=revenue, completed_at=completed_at or self.now,
        )


class VehicleMetricsTest(CostAggregationTestBase):

    def test_negative_roi(self):
        vehicle = make_vehicle(acquisition_cost=Decimal('10000'))
        FuelLog.objects.create(vehicle=vehicle, liters=Decimal('100'), cost=Decimal('5000'))
        MaintenanceLog.objects.create(vehicle=vehicle, description="Engine", cost=Decimal('4000'))
        Expense.objects.create(vehicle=vehicle, description="Insurance", amount=Decimal('3000'))
        self.completed_trip(vehicle, revenue=Decimal('9000'))

        [metric] = CostAggregationEngine(now=self.now).vehicle_metrics()

        self.assertEqual(metric.total_operational_cost, Decimal('12000.00'))
        self.assertEqual(metric.revenue, Decimal('9000.00'))
        self.assertEqual(metric.roi_percent, Decimal('-30.0'))
        self.assertEqual(metric.raw_roi_percent, Decimal('-30'))
        self.assertEqual(metric.distance_km, 500)
        self.assertEqual(metric.fuel_efficiency_km_per_l, Decimal('5.0'))
        self.assertEqual(metric.completed_trips, 1)

    def test_efficiency_is_none_without_fuel(self):
        vehicle = make_vehicle()
        self.completed_trip(vehicle)

        [metric] = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual(metric.distance_km, 500)
        self.assertIsNone(metric.fuel_efficiency_km_per_l)

    def test_roi_is_none_without_acquisition_cost(self):
        make_vehicle(acquisition_cost=None)
        make_vehicle(acquisition_cost=Decimal('0'))

        metrics = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual([m.roi_percent for m in metrics], [None, None])
        self.assertEqual([m.raw_roi_percent for m in metrics], [None, None])

    def test_missing_costs_and_revenue_count_as_zero(self):
        vehicle = make_vehicle(acquisition_cost=Decimal('1000'))
        MaintenanceLog.objects.create(vehicle=vehicle, description="Warranty", cost=None)
        self.completed_trip(vehicle, revenue=None)

        [metric] = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual(metric.total_maintenance_cost, Decimal('0'))
        self.assertEqual(metric.revenue, Decimal('0'))
        self.assertEqual(metric.roi_percent, Decimal('0.0'))

    def test_only_completed_trips_count(self):
        vehicle = make_vehicle()
        Trip.objects.create(vehicle=vehicle, driver=self.driver, cargo_weight_kg=Decimal('1'),
                            origin="A", destination="B", status=Trip.CANCELLED, revenue=Decimal('500'))

        [metric] = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual(metric.revenue, Decimal('0'))
        self.assertEqual(metric.completed_trips, 0)

    def test_distance_needs_both_readings(self):
        vehicle = make_vehicle()
        self.completed_trip(vehicle, start_km=None, end_km=1500)
        self.completed_trip(vehicle, start_km=2000, end_km=2100)

        [metric] = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual(metric.distance_km, 100)
        self.assertIsNone(trip_distance(None, 10))

    def test_retired_vehicles_are_excluded(self):
        active = make_vehicle()
        make_vehicle(status=Vehicle.OUT_OF_SERVICE)

        metrics = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual([m.vehicle_id for m in metrics], [active.pk])

    def test_retired_vehicles_can_be_included(self):
        active = make_vehicle()
        retired = make_vehicle(status=Vehicle.OUT_OF_SERVICE)

        metrics = CostAggregationEngine(now=self.now).vehicle_metrics(include_retired=True)
        self.assertEqual([m.vehicle_id for m in metrics], [active.pk, retired.pk])
        self.assertEqual(metrics[1].status, Vehicle.OUT_OF_SERVICE)

    def test_money_rounds_half_up_at_output(self):
        vehicle = make_vehicle()
        FuelLog.objects.create(vehicle=vehicle, liters=Decimal('1'), cost=Decimal('0.01'))
        FuelLog.objects.create(vehicle=vehicle, liters=Decimal('2'), cost=Decimal('0.02'))

        [metric] = CostAggregationEngine(now=self.now).vehicle_metrics()
        self.assertEqual(metric.total_fuel_cost, Decimal('0.03'))
        self.assertEqual(metric.total_fuel_liters, Decimal('3.00'))


class MonthlyFinancialsTest(CostAggregationTestBase):

    def test_buckets_by_record_month_without_gaps(self):
        vehicle = make_vehicle()
        retired = make_vehicle(status=Vehicle.OUT_OF_SERVICE)
        FuelLog.objects.create(vehicle=vehicle, liters=Decimal('50'), cost=Decimal('100'), date=aware(2026, 1, 10))
        MaintenanceLog.objects.create(vehicle=retired, description="Tyres", cost=Decimal('40'),
                                      performed_at=aware(2026, 1, 20))
        self.completed_trip(vehicle, start_km=0, end_km=250, revenue=Decimal('600'), completed_at=aware(2026, 1, 25))
        Expense.objects.create(vehicle=vehicle, description="Permit", amount=Decimal('30'), date=aware(2026, 4, 2))

        months = CostAggregationEngine(now=self.now).monthly_financials()

        self.assertEqual([m.month for m in months], ['2026-01', '2026-04'])
        january, april = months
        self.assertEqual(january.revenue, Decimal('600.00'))
        self.assertEqual(january.total_operational_cost, Decimal('140.00'))
        self.assertEqual(january.net_profit, Decimal('460.00'))
        self.assertEqual(january.trip_count, 1)
        self.assertEqual(january.fuel_efficiency_km_per_l, Decimal('5.0'))
        self.assertEqual(april.net_profit, Decimal('-30.00'))
        self.assertIsNone(april.fuel_efficiency_km_per_l)

    def test_trip_without_completion_time_uses_creation_month(self):
        vehicle = make_vehicle()
        trip = self.completed_trip(vehicle, revenue=Decimal('10'))
        Trip.objects.filter(pk=trip.pk).update(completed_at=None, created_at=aware(2025, 11, 3))

        months = CostAggregationEngine(now=self.now).monthly_financials()
        self.assertEqual([m.month for m in months], ['2025-11'])

    def test_no_records(self):
        self.assertEqual(CostAggregationEngine(now=self.now).monthly_financials(), [])


class FleetSummaryTest(CostAggregationTestBase):

    def test_empty_fleet_has_zero_utilization(self):
        summary = CostAggregationEngine(now=self.now).fleet_summary()
        self.assertEqual(summary.active_vehicle_count, 0)
        self.assertEqual(summary.utilization_rate_percent, Decimal('0'))
        self.assertIsNone(summary.fleet_roi_percent)

    def test_only_retired_vehicles_has_zero_utilization(self):
        vehicle = make_vehicle(status=Vehicle.OUT_OF_SERVICE)
        self.completed_trip(vehicle)
        self.assertEqual(CostAggregationEngine(now=self.now).utilization_rate_percent(), Decimal('0'))

    def test_utilization_over_trailing_window(self):
        recent = make_vehicle()
        stale = make_vehicle()
        make_vehicle()
        self.completed_trip(recent, completed_at=self.now - timedelta(days=5))
        self.completed_trip(recent, completed_at=self.now - timedelta(days=6))
        self.completed_trip(stale, completed_at=self.now - timedelta(days=40))

        summary = CostAggregationEngine(now=self.now).fleet_summary()
        self.assertEqual(summary.utilization_rate_percent, Decimal('33.3'))
        self.assertEqual(summary.completed_trip_count, 3)

    def test_totals_and_fleet_roi(self):
        first = make_vehicle(acquisition_cost=Decimal('10000'))
        second = make_vehicle(acquisition_cost=Decimal('10000'), status=Vehicle.IN_SHOP)
        FuelLog.objects.create(vehicle=first, liters=Decimal('10'), cost=Decimal('1000'))
        self.completed_trip(second, revenue=Decimal('3000'))
        make_cargo()

        summary = CostAggregationEngine(now=self.now).fleet_summary()
        self.assertEqual(summary.active_vehicle_count, 2)
        self.assertEqual(summary.total_revenue, Decimal('3000.00'))
        self.assertEqual(summary.total_operational_cost, Decimal('1000.00'))
        self.assertEqual(summary.net_profit, Decimal('2000.00'))
        self.assertEqual(summary.fleet_roi_percent, Decimal('10.0'))
        self.assertEqual(summary.pending_cargo_count, 1)
        self.assertEqual(summary.status_counts[Vehicle.IN_SHOP], 1)
        self.assertEqual(summary.status_counts[Vehicle.OUT_OF_SERVICE], 0)
