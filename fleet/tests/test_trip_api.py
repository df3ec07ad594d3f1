from decimal import Decimal

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from fleet.models import Vehicle, Driver, Trip
from fleet.tests.factories import make_user, make_vehicle, make_driver, make_cargo


class TripAPITest(TestCase):
    """Integration tests for the trip endpoints."""

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=make_user())
        self.vehicle = make_vehicle(max_load_capacity_kg=Decimal('500'), odometer_km=1000)
        self.driver = make_driver()

    def create_payload(self, **overrides):
        payload = {
            "vehicle_id": self.vehicle.pk,
            "driver_id": self.driver.pk,
            "cargo_weight_kg": "300",
            "origin": "Colombo",
            "destination": "Jaffna",
        }
        payload.update(overrides)
        return payload

    def transition(self, trip_id, **payload):
        return self.client.post(f'/api/fleet/trips/{trip_id}/transition/', payload, format='json')

    def test_requires_authentication(self):
        response = APIClient().get('/api/fleet/trips/')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_create_trip(self):
        """POST /api/fleet/trips/ should create a DRAFT trip."""
        response = self.client.post('/api/fleet/trips/', self.create_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], Trip.DRAFT)
        self.assertEqual(response.data['vehicle'], self.vehicle.pk)
        self.assertEqual(response.data['vehicle_license_plate'], self.vehicle.license_plate)

    def test_create_trip_over_capacity(self):
        response = self.client.post('/api/fleet/trips/', self.create_payload(cargo_weight_kg="600"), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'capacity_exceeded')
        self.assertEqual(response.data['error'], "Cargo weight (600 kg) exceeds vehicle max capacity (500 kg)")
        self.assertEqual(Trip.objects.count(), 0)

    def test_create_trip_rejects_unknown_fields(self):
        response = self.client.post('/api/fleet/trips/', self.create_payload(status="DISPATCHED"), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('status', response.data)

    def test_create_trip_missing_driver(self):
        response = self.client.post('/api/fleet/trips/', self.create_payload(driver_id=99999), format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'driver_not_found')

    def test_create_trip_with_cargo(self):
        cargo = make_cargo()
        response = self.client.post('/api/fleet/trips/', self.create_payload(cargo_id=cargo.pk), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        pending = self.client.get('/api/fleet/cargo/', {'pending': 'true'})
        self.assertEqual(pending.data, [])

    def test_full_lifecycle(self):
        trip_id = self.client.post('/api/fleet/trips/', self.create_payload(), format='json').data['id']

        response = self.transition(trip_id, status="DISPATCHED")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['start_odometer_km'], 1000)
        self.assertEqual(Vehicle.objects.get(pk=self.vehicle.pk).status, Vehicle.ON_TRIP)
        self.assertEqual(Driver.objects.get(pk=self.driver.pk).status, Driver.ON_DUTY)

        response = self.transition(trip_id, status="completed", end_odometer_km=1200, revenue="900.00")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], Trip.COMPLETED)
        self.assertEqual(response.data['distance_km'], 200)
        self.assertFalse(response.data['has_odometer_regression'])
        self.assertEqual(Vehicle.objects.get(pk=self.vehicle.pk).odometer_km, 1200)

        response = self.transition(trip_id, status="CANCELLED")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_transition')
        self.assertEqual(response.data['current_status'], Trip.COMPLETED)

    def test_transition_unknown_trip(self):
        response = self.transition(99999, status="DISPATCHED")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['code'], 'trip_not_found')

    def test_transition_rejects_negative_odometer(self):
        trip_id = self.client.post('/api/fleet/trips/', self.create_payload(), format='json').data['id']
        response = self.transition(trip_id, status="COMPLETED", end_odometer_km=-5)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_odometer_km', response.data)

    def test_trips_cannot_be_deleted(self):
        trip_id = self.client.post('/api/fleet/trips/', self.create_payload(), format='json').data['id']
        response = self.client.delete(f'/api/fleet/trips/{trip_id}/')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_filter_trips_by_status(self):
        first = self.client.post('/api/fleet/trips/', self.create_payload(), format='json').data['id']
        self.client.post('/api/fleet/trips/', self.create_payload(), format='json')
        self.transition(first, status="CANCELLED")

        response = self.client.get('/api/fleet/trips/', {'status': Trip.DRAFT})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
