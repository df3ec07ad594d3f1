"""
Output serializers for the analytics report objects.
"""
from rest_framework import serializers


def money_field(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=2, coerce_to_string=False, **kwargs)


def percent_field(**kwargs):
    return serializers.DecimalField(max_digits=10, decimal_places=1, coerce_to_string=False,
                                    allow_null=True, **kwargs)


class VehicleMetricSerializer(serializers.Serializer):
    vehicle_id = serializers.IntegerField()
    name = serializers.CharField()
    license_plate = serializers.CharField()
    status = serializers.CharField()
    total_fuel_cost = money_field()
    total_fuel_liters = money_field()
    distance_km = serializers.IntegerField()
    fuel_efficiency_km_per_l = percent_field(help_text="Kilometers per liter; null when no fuel was logged.")
    total_maintenance_cost = money_field()
    total_other_expense = money_field()
    total_operational_cost = money_field()
    revenue = money_field()
    completed_trips = serializers.IntegerField()
    acquisition_cost = money_field(allow_null=True)
    roi_percent = percent_field(help_text="Null when the acquisition cost is missing or zero.")


class MonthlyFinancialSerializer(serializers.Serializer):
    month = serializers.CharField(help_text="YYYY-MM")
    revenue = money_field()
    fuel_cost = money_field()
    fuel_liters = money_field()
    maintenance_cost = money_field()
    other_expense = money_field()
    total_operational_cost = money_field()
    net_profit = money_field()
    trip_count = serializers.IntegerField()
    distance_km = serializers.IntegerField()
    fuel_efficiency_km_per_l = percent_field()


class FleetSummarySerializer(serializers.Serializer):
    active_vehicle_count = serializers.IntegerField()
    status_counts = serializers.DictField(child=serializers.IntegerField())
    completed_trip_count = serializers.IntegerField()
    pending_cargo_count = serializers.IntegerField()
    total_revenue = money_field()
    total_operational_cost = money_field()
    net_profit = money_field()
    fleet_roi_percent = percent_field()
    utilization_rate_percent = serializers.DecimalField(max_digits=5, decimal_places=1, coerce_to_string=False)


class AlertSerializer(serializers.Serializer):
    id = serializers.CharField()
    level = serializers.ChoiceField(choices=['critical', 'warning'])
    title = serializers.CharField()
    message = serializers.CharField()
    created_at = serializers.DateTimeField()


class AlertSummarySerializer(serializers.Serializer):
    total = serializers.IntegerField()
    critical = serializers.IntegerField()
    warning = serializers.IntegerField()


class AlertReportSerializer(serializers.Serializer):
    alerts = AlertSerializer(many=True)
    summary = AlertSummarySerializer()
