from rest_framework import mixins, viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema

from fleet.models import Trip
from fleet.serializers import TripSerializer, TripCreateSerializer, TripTransitionSerializer
from fleet.services.trip_service import TripService
from fleet.views.base import ServiceCallMixin


class TripViewSet(ServiceCallMixin,
                  mixins.ListModelMixin,
                  mixins.RetrieveModelMixin,
                  viewsets.GenericViewSet):
    """
    API endpoint for trips. Trips are created as DRAFT and only change
    through the ``transition`` action.
    """
    queryset = Trip.objects.select_related('vehicle', 'driver')
    serializer_class = TripSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['status', 'vehicle', 'driver']
    ordering_fields = ['created_at', 'completed_at']
    ordering = ['-created_at']
    trip_service = TripService()

    @swagger_auto_schema(request_body=TripCreateSerializer, responses={201: TripSerializer})
    def create(self, request, *args, **kwargs):
        serializer = TripCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        trip_request = serializer.to_request()

        return self.handle_service_call(
            lambda principal: self.trip_service.create_trip(principal, trip_request),
            success_status=status.HTTP_201_CREATED
        )

    @swagger_auto_schema(request_body=TripTransitionSerializer, responses={200: TripSerializer})
    @action(detail=True, methods=['post'])
    def transition(self, request, pk=None):
        """
        Move a trip through its lifecycle.
        POST /api/fleet/trips/{id}/transition/
        {
            "status": "COMPLETED",
            "end_odometer_km": 10250,
            "revenue": "1500.00"
        }
        """
        serializer = TripTransitionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        transition_request = serializer.to_request()

        return self.handle_service_call(
            lambda principal: self.trip_service.transition_trip(principal, pk, transition_request)
        )
