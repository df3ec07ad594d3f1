from rest_framework import viewsets, filters
from rest_framework.decorators import action
from django_filters.rest_framework import DjangoFilterBackend

from fleet.models import Vehicle
from fleet.serializers import VehicleSerializer
from fleet.services import status_services
from fleet.views.base import ServiceCallMixin


class VehicleViewSet(ServiceCallMixin, viewsets.ModelViewSet):
    """
    API endpoint for managing vehicles.

    Vehicles are never deleted; use ``retire`` to take one out of service.
    """
    queryset = Vehicle.objects.all()
    serializer_class = VehicleSerializer
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'vehicle_type', 'region']
    search_fields = ['name', 'model', 'license_plate']
    ordering_fields = ['name', 'max_load_capacity_kg', 'odometer_km', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params

        if params.get('available') == 'true':
            queryset = queryset.filter(status=Vehicle.AVAILABLE)
        if params.get('active') == 'true':
            queryset = queryset.exclude(status=Vehicle.OUT_OF_SERVICE)
        return queryset

    @action(detail=True, methods=['post'])
    def release_from_shop(self, request, pk=None):
        """
        Return a vehicle from maintenance to the available pool.
        POST /api/fleet/vehicles/{id}/release_from_shop/
        """
        vehicle = self.get_object()

        def release(principal):
            status_services.release_vehicle_from_shop(vehicle)
            return vehicle

        return self.handle_service_call(release)

    @action(detail=True, methods=['post'])
    def retire(self, request, pk=None):
        """
        Take a vehicle out of service.
        POST /api/fleet/vehicles/{id}/retire/
        """
        vehicle = self.get_object()

        def retire(principal):
            status_services.retire_vehicle(vehicle)
            return vehicle

        return self.handle_service_call(retire)
