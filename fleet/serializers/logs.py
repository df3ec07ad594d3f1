from rest_framework import serializers

from fleet.models import FuelLog, MaintenanceLog, Expense
from fleet.serializers.base import StrictFieldsMixin


class FuelLogSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = FuelLog
        fields = ['id', 'vehicle', 'trip', 'liters', 'cost', 'date', 'created_at']
        read_only_fields = ['created_at']
        extra_kwargs = {'date': {'required': False}}


class MaintenanceLogSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    vehicle_status = serializers.CharField(source='vehicle.status', read_only=True)

    class Meta:
        model = MaintenanceLog
        fields = ['id', 'vehicle', 'vehicle_status', 'description', 'cost', 'performed_at', 'created_at']
        read_only_fields = ['created_at']
        extra_kwargs = {'performed_at': {'required': False}}


class ExpenseSerializer(StrictFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = Expense
        fields = ['id', 'vehicle', 'description', 'amount', 'date', 'created_at']
        read_only_fields = ['created_at']
        extra_kwargs = {'date': {'required': False}}
