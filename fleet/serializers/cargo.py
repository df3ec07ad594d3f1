from rest_framework import serializers
from fleet.models import Cargo
from fleet.serializers.base import StrictFieldsMixin


class CargoSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    is_pending = serializers.BooleanField(read_only=True)

    class Meta:
        model = Cargo
        fields = [
            'id', 'description', 'weight_kg', 'origin', 'destination',
            'assigned_trip', 'is_pending', 'created_at'
        ]
        read_only_fields = ['assigned_trip', 'created_at']
