from rest_framework import serializers
from fleet.models import Vehicle
from fleet.serializers.base import StrictFieldsMixin


class VehicleSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    is_available = serializers.BooleanField(read_only=True)

    class Meta:
        model = Vehicle
        fields = [
            'id',
            'name',
            'model',
            'license_plate',
            'vehicle_type',
            'max_load_capacity_kg',
            'status',
            'odometer_km',
            'region',
            'acquisition_cost',
            'created_at',
            'updated_at',
            'is_available',
        ]
        read_only_fields = ['status', 'created_at', 'updated_at']

    def validate_odometer_km(self, value):
        # The trip lifecycle owns the live odometer once the vehicle is registered
        if self.instance is not None and value != self.instance.odometer_km:
            raise serializers.ValidationError("Odometer is updated by completing trips.")
        return value
