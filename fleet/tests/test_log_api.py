from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from fleet.models import Vehicle, Trip, FuelLog
from fleet.tests.factories import make_user, make_vehicle, make_driver


class CostLogAPITest(TestCase):
    """Fuel, maintenance and expense logs are append-only."""

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=make_user())
        self.vehicle = make_vehicle()

    def test_record_fuel(self):
        response = self.client.post('/api/fleet/fuel/', {
            "vehicle": self.vehicle.pk, "liters": "42.5", "cost": "61.20"
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['liters'], "42.50")
        self.assertIsNotNone(response.data['date'])

    def test_fuel_for_another_vehicles_trip(self):
        other = make_vehicle()
        trip = Trip.objects.create(vehicle=other, driver=make_driver(), cargo_weight_kg=Decimal('10'),
                                   origin="A", destination="B")
        response = self.client.post('/api/fleet/fuel/', {
            "vehicle": self.vehicle.pk, "trip": trip.pk, "liters": "10", "cost": "15"
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'trip_vehicle_mismatch')

    def test_fuel_logs_cannot_be_edited(self):
        fuel_log = FuelLog.objects.create(vehicle=self.vehicle, liters=Decimal('5'), cost=Decimal('7'))
        response = self.client.patch(f'/api/fleet/fuel/{fuel_log.pk}/', {"cost": "1"}, format='json')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        response = self.client.delete(f'/api/fleet/fuel/{fuel_log.pk}/')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_record_maintenance(self):
        response = self.client.post('/api/fleet/maintenance/', {
            "vehicle": self.vehicle.pk, "description": "Gearbox", "cost": "1200"
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['vehicle_status'], Vehicle.IN_SHOP)

    def test_maintenance_while_on_trip(self):
        Vehicle.objects.filter(pk=self.vehicle.pk).update(status=Vehicle.ON_TRIP)
        response = self.client.post('/api/fleet/maintenance/', {
            "vehicle": self.vehicle.pk, "description": "Gearbox"
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'vehicle_on_trip')

    def test_record_expense_rejects_unknown_fields(self):
        response = self.client.post('/api/fleet/expenses/', {
            "vehicle": self.vehicle.pk, "description": "Tolls", "amount": "12", "paid_by": "cash"
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('paid_by', response.data)

    def test_record_expense(self):
        response = self.client.post('/api/fleet/expenses/', {
            "vehicle": self.vehicle.pk, "description": "Tolls", "amount": "12"
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['amount'], "12.00")
