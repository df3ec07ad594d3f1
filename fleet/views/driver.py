from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from fleet.models import Driver
from fleet.serializers import DriverSerializer, DriverStatusSerializer
from fleet.services import status_services
from fleet.views.base import ServiceCallMixin


class DriverViewSet(ServiceCallMixin, viewsets.ModelViewSet):
    """
    API endpoint for managing drivers.
    """
    queryset = Driver.objects.all()
    serializer_class = DriverSerializer
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status']
    search_fields = ['name', 'license_number']
    ordering_fields = ['name', 'license_expiry', 'safety_score', 'created_at']
    ordering = ['name']

    @action(detail=True, methods=['post'])
    def change_status(self, request, pk=None):
        """
        POST /api/fleet/drivers/{id}/change_status/
        {"status": "OFF_DUTY"}
        """
        driver = self.get_object()
        serializer = DriverStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=400)
        new_status = serializer.validated_data['status'].strip().upper()

        def change(principal):
            status_services.change_driver_status(driver, new_status)
            return driver

        return self.handle_service_call(change)
