from datetime import timedelta
from decimal import Decimal
from itertools import count

from django.contrib.auth import get_user_model
from django.utils import timezone

from fleet.models import Vehicle, Driver, Cargo, VEHICLE_TYPE_TRUCK
from fleet.services.types import Principal

_sequence = count(1)


def make_user(username='dispatcher'):
    return get_user_model().objects.create_user(username=username, password='secret-pass')


def make_principal(username='dispatcher'):
    return Principal(user_id=None, username=username)


def make_vehicle(**overrides):
    n = next(_sequence)
    fields = {
        'name': f"Truck {n}",
        'model': "Volvo FH",
        'license_plate': f"TRK-{n:04d}",
        'vehicle_type': VEHICLE_TYPE_TRUCK,
        'max_load_capacity_kg': Decimal('500'),
        'odometer_km': 1000,
    }
    fields.update(overrides)
    return Vehicle.objects.create(**fields)


def make_driver(**overrides):
    n = next(_sequence)
    fields = {
        'name': f"Driver {n}",
        'license_number': f"DL-{n:05d}",
        'license_expiry': timezone.now() + timedelta(days=365),
        'authorized_vehicle_types': [VEHICLE_TYPE_TRUCK],
    }
    fields.update(overrides)
    return Driver.objects.create(**fields)


def make_cargo(**overrides):
    fields = {
        'description': "Pallets",
        'weight_kg': Decimal('200'),
        'origin': "Colombo",
        'destination': "Kandy",
    }
    fields.update(overrides)
    return Cargo.objects.create(**fields)
