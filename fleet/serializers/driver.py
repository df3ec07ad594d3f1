from django.utils import timezone
from rest_framework import serializers

from fleet.models import Driver, VEHICLE_TYPE_CHOICES
from fleet.serializers.base import StrictFieldsMixin


class DriverSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    authorized_vehicle_types = serializers.ListField(
        child=serializers.ChoiceField(choices=VEHICLE_TYPE_CHOICES),
        allow_empty=False
    )
    license_expired = serializers.SerializerMethodField()

    class Meta:
        model = Driver
        fields = [
            'id',
            'name',
            'license_number',
            'license_expiry',
            'authorized_vehicle_types',
            'status',
            'safety_score',
            'license_expired',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['status', 'created_at', 'updated_at']

    def validate_authorized_vehicle_types(self, value):
        # Keep the first occurrence order, drop duplicates
        return list(dict.fromkeys(value))

    def get_license_expired(self, obj):
        return not obj.license_valid_at(timezone.now())


class DriverStatusSerializer(StrictFieldsMixin, serializers.Serializer):
    status = serializers.CharField()
