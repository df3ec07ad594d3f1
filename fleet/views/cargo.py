from rest_framework import viewsets, filters

from fleet.models import Cargo
from fleet.serializers import CargoSerializer


class CargoViewSet(viewsets.ModelViewSet):
    """
    API endpoint for cargo. ``?pending=true`` lists cargo not yet on a trip.
    """
    queryset = Cargo.objects.select_related('assigned_trip')
    serializer_class = CargoSerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['description', 'origin', 'destination']
    ordering_fields = ['weight_kg', 'created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        queryset = super().get_queryset()
        pending = self.request.query_params.get('pending')
        if pending == 'true':
            queryset = queryset.filter(assigned_trip__isnull=True)
        elif pending == 'false':
            queryset = queryset.filter(assigned_trip__isnull=False)
        return queryset
