"""
Read-only reporting endpoints. Every request recomputes from current data.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_yasg.utils import swagger_auto_schema

from analytics.api.serializers import (
    VehicleMetricSerializer,
    MonthlyFinancialSerializer,
    FleetSummarySerializer,
    AlertReportSerializer,
)
from analytics.services.alert_generator import AlertGenerator
from analytics.services.cost_aggregation import CostAggregationEngine

logger = logging.getLogger(__name__)


class VehicleMetricsView(APIView):
    @swagger_auto_schema(
        responses={200: VehicleMetricSerializer(many=True)},
        operation_description="Per-vehicle costs, fuel efficiency and ROI for vehicles still in service.",
        tags=['Analytics']
    )
    def get(self, request, format=None):
        metrics = CostAggregationEngine().vehicle_metrics()
        return Response(VehicleMetricSerializer(metrics, many=True).data, status=status.HTTP_200_OK)


class MonthlyFinancialsView(APIView):
    @swagger_auto_schema(
        responses={200: MonthlyFinancialSerializer(many=True)},
        operation_description="Revenue, costs and net profit per calendar month, oldest first.",
        tags=['Analytics']
    )
    def get(self, request, format=None):
        months = CostAggregationEngine().monthly_financials()
        return Response(MonthlyFinancialSerializer(months, many=True).data, status=status.HTTP_200_OK)


class FleetSummaryView(APIView):
    @swagger_auto_schema(
        responses={200: FleetSummarySerializer},
        operation_description="Fleet KPIs: status counts, pending cargo, fleet ROI and 30-day utilization.",
        tags=['Analytics']
    )
    def get(self, request, format=None):
        summary = CostAggregationEngine().fleet_summary()
        return Response(FleetSummarySerializer(summary).data, status=status.HTTP_200_OK)


class AlertsView(APIView):
    @swagger_auto_schema(
        responses={200: AlertReportSerializer},
        operation_description="Overdue trips, expiring licenses, vehicles in the shop and negative ROI.",
        tags=['Analytics']
    )
    def get(self, request, format=None):
        report = AlertGenerator().generate()
        return Response(AlertReportSerializer(report).data, status=status.HTTP_200_OK)
