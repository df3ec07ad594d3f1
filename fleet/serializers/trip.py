from decimal import Decimal

from rest_framework import serializers

from fleet.models import Trip
from fleet.serializers.base import StrictFieldsMixin
from fleet.services.types import CreateTripRequest, TransitionTripRequest


class TripSerializer(serializers.ModelSerializer):
    distance_km = serializers.IntegerField(read_only=True)
    has_odometer_regression = serializers.BooleanField(read_only=True)
    vehicle_name = serializers.CharField(source='vehicle.name', read_only=True)
    vehicle_license_plate = serializers.CharField(source='vehicle.license_plate', read_only=True)
    driver_name = serializers.CharField(source='driver.name', read_only=True)

    class Meta:
        model = Trip
        fields = [
            'id', 'status', 'vehicle', 'vehicle_name', 'vehicle_license_plate',
            'driver', 'driver_name', 'cargo_weight_kg', 'origin', 'destination',
            'start_odometer_km', 'end_odometer_km', 'distance_km', 'has_odometer_regression',
            'revenue', 'created_at', 'completed_at', 'updated_at'
        ]
        read_only_fields = fields


class TripCreateSerializer(StrictFieldsMixin, serializers.Serializer):
    vehicle_id = serializers.IntegerField(help_text="ID of the vehicle to assign.")
    driver_id = serializers.IntegerField(help_text="ID of the driver to assign.")
    cargo_weight_kg = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.01'),
        help_text="Weight of the load in kilograms."
    )
    origin = serializers.CharField(max_length=255)
    destination = serializers.CharField(max_length=255)
    cargo_id = serializers.IntegerField(
        required=False, allow_null=True,
        help_text="Optional pending cargo to link to this trip."
    )

    def to_request(self) -> CreateTripRequest:
        return CreateTripRequest(**self.validated_data)


class TripTransitionSerializer(StrictFieldsMixin, serializers.Serializer):
    # Plain string: unknown names are rejected by the lifecycle as invalid transitions
    status = serializers.CharField(help_text="Target status: DISPATCHED, COMPLETED or CANCELLED.")
    end_odometer_km = serializers.IntegerField(
        required=False, allow_null=True, min_value=0,
        help_text="Odometer at completion. Defaults to the vehicle's current reading."
    )
    revenue = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=Decimal('0'),
        help_text="Revenue earned by the trip, recorded on completion."
    )

    def to_request(self) -> TransitionTripRequest:
        data = self.validated_data
        return TransitionTripRequest(
            next_status=data['status'].strip().upper(),
            end_odometer_km=data.get('end_odometer_km'),
            revenue=data.get('revenue'),
        )
