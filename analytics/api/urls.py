"""
URL configuration for the analytics API.
"""
from django.urls import path
from analytics.api.views import VehicleMetricsView, MonthlyFinancialsView, FleetSummaryView, AlertsView

app_name = 'analytics'

urlpatterns = [
    path('vehicle-metrics/', VehicleMetricsView.as_view(), name='vehicle_metrics'),
    path('monthly/', MonthlyFinancialsView.as_view(), name='monthly_financials'),
    path('summary/', FleetSummaryView.as_view(), name='fleet_summary'),
    path('alerts/', AlertsView.as_view(), name='alerts'),
]
