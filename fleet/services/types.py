"""
Typed requests accepted by the fleet core services.

The API layer validates raw payloads with serializers and then builds these;
the services never look at request dicts or ambient request state.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Any

from fleet.exceptions import ValidationFailed


def _to_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationFailed(f"{field_name} must be a number", code=f'invalid_{field_name}')


@dataclass(frozen=True)
class Principal:
    """The authenticated caller on whose behalf a core operation runs."""
    user_id: Optional[int]
    username: str

    @classmethod
    def from_user(cls, user) -> 'Principal':
        if user is None or not getattr(user, 'is_authenticated', False):
            raise ValidationFailed("An authenticated principal is required", code='unauthenticated')
        return cls(user_id=user.pk, username=user.get_username())

    def __str__(self):
        return self.username


@dataclass
class CreateTripRequest:
    vehicle_id: int
    driver_id: int
    cargo_weight_kg: Decimal
    origin: str
    destination: str
    cargo_id: Optional[int] = None

    def __post_init__(self):
        self.cargo_weight_kg = _to_decimal(self.cargo_weight_kg, 'cargo_weight_kg')
        if self.cargo_weight_kg <= 0:
            raise ValidationFailed("Cargo weight must be greater than zero", code='invalid_cargo_weight_kg')
        self.origin = (self.origin or '').strip()
        self.destination = (self.destination or '').strip()
        if not self.origin:
            raise ValidationFailed("Origin is required", code='invalid_origin')
        if not self.destination:
            raise ValidationFailed("Destination is required", code='invalid_destination')


@dataclass
class TransitionTripRequest:
    next_status: str
    end_odometer_km: Optional[int] = None
    revenue: Optional[Decimal] = None

    def __post_init__(self):
        if self.end_odometer_km is not None:
            if isinstance(self.end_odometer_km, bool) or not isinstance(self.end_odometer_km, int):
                raise ValidationFailed("End odometer must be a whole number of kilometers",
                                       code='invalid_end_odometer_km')
            if self.end_odometer_km < 0:
                raise ValidationFailed("End odometer cannot be negative", code='invalid_end_odometer_km')
        if self.revenue is not None:
            self.revenue = _to_decimal(self.revenue, 'revenue')
            if self.revenue < 0:
                raise ValidationFailed("Revenue cannot be negative", code='invalid_revenue')
