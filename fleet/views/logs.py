from rest_framework import mixins, viewsets, status, filters
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from fleet.models import FuelLog, MaintenanceLog, Expense
from fleet.serializers import FuelLogSerializer, MaintenanceLogSerializer, ExpenseSerializer
from fleet.services import log_services
from fleet.views.base import ServiceCallMixin


class AppendOnlyViewSet(ServiceCallMixin,
                        mixins.ListModelMixin,
                        mixins.RetrieveModelMixin,
                        viewsets.GenericViewSet):
    """Cost logs can be recorded and read, never edited or removed."""
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]

    def record(self, principal, data):
        raise NotImplementedError

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        data = serializer.validated_data

        return self.handle_service_call(
            lambda principal: self.record(principal, data),
            success_status=status.HTTP_201_CREATED
        )


class FuelLogViewSet(AppendOnlyViewSet):
    """
    POST /api/fleet/fuel/
    {"vehicle": 1, "trip": 4, "liters": "42.5", "cost": "61.20"}
    """
    queryset = FuelLog.objects.select_related('vehicle', 'trip')
    serializer_class = FuelLogSerializer
    filterset_fields = ['vehicle', 'trip']
    ordering_fields = ['date', 'cost', 'liters']
    ordering = ['-date']

    def record(self, principal, data):
        trip = data.get('trip')
        return log_services.log_fuel(
            principal,
            data['vehicle'].pk,
            liters=data['liters'],
            cost=data['cost'],
            date=data.get('date'),
            trip_id=trip.pk if trip is not None else None,
        )


class MaintenanceLogViewSet(AppendOnlyViewSet):
    """
    Recording maintenance sends the vehicle to the shop.
    """
    queryset = MaintenanceLog.objects.select_related('vehicle')
    serializer_class = MaintenanceLogSerializer
    filterset_fields = ['vehicle']
    ordering_fields = ['performed_at', 'cost']
    ordering = ['-performed_at']

    def record(self, principal, data):
        return log_services.log_maintenance(
            principal,
            data['vehicle'].pk,
            description=data['description'],
            cost=data.get('cost'),
            performed_at=data.get('performed_at'),
        )


class ExpenseViewSet(AppendOnlyViewSet):
    queryset = Expense.objects.select_related('vehicle')
    serializer_class = ExpenseSerializer
    filterset_fields = ['vehicle']
    ordering_fields = ['date', 'amount']
    ordering = ['-date']

    def record(self, principal, data):
        return log_services.log_expense(
            principal,
            data['vehicle'].pk,
            description=data['description'],
            amount=data['amount'],
            date=data.get('date'),
        )
