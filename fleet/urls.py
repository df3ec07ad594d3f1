from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    VehicleViewSet, DriverViewSet, CargoViewSet, TripViewSet,
    FuelLogViewSet, MaintenanceLogViewSet, ExpenseViewSet
)

router = DefaultRouter()
router.register(r'vehicles', VehicleViewSet)
router.register(r'drivers', DriverViewSet)
router.register(r'cargo', CargoViewSet)
router.register(r'trips', TripViewSet)
router.register(r'fuel', FuelLogViewSet)
router.register(r'maintenance', MaintenanceLogViewSet)
router.register(r'expenses', ExpenseViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
