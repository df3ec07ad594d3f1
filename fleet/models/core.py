from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone

VEHICLE_TYPE_TRUCK = 'TRUCK'
VEHICLE_TYPE_VAN = 'VAN'
VEHICLE_TYPE_BIKE = 'BIKE'

VEHICLE_TYPE_CHOICES = [
    (VEHICLE_TYPE_TRUCK, 'Truck'),
    (VEHICLE_TYPE_VAN, 'Van'),
    (VEHICLE_TYPE_BIKE, 'Bike'),
]


class Vehicle(models.Model):
    """
    Model representing a vehicle in the fleet.

    Vehicles are never deleted; retirement is status OUT_OF_SERVICE.
    """
    AVAILABLE = 'AVAILABLE'
    ON_TRIP = 'ON_TRIP'
    IN_SHOP = 'IN_SHOP'
    OUT_OF_SERVICE = 'OUT_OF_SERVICE'

    STATUS_CHOICES = [
        (AVAILABLE, 'Available'),
        (ON_TRIP, 'On Trip'),
        (IN_SHOP, 'In Shop'),
        (OUT_OF_SERVICE, 'Out of Service'),
    ]

    name = models.CharField(max_length=100)
    model = models.CharField(max_length=100)
    license_plate = models.CharField(max_length=20, unique=True)
    vehicle_type = models.CharField(max_length=10, choices=VEHICLE_TYPE_CHOICES)
    max_load_capacity_kg = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0.01)],
        help_text="Maximum load capacity in kilograms"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=AVAILABLE)
    odometer_km = models.PositiveIntegerField(default=0, help_text="Odometer reading in kilometers")
    region = models.CharField(max_length=64, blank=True, null=True)
    acquisition_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.license_plate}, {self.status})"

    @property
    def is_available(self):
        """Check if vehicle can take a new trip."""
        return self.status == self.AVAILABLE

    @property
    def is_active(self):
        """Active vehicles are everything that has not been retired."""
        return self.status != self.OUT_OF_SERVICE

    class Meta:
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['license_plate']),
        ]


class Driver(models.Model):
    """
    Model representing a licensed driver.
    """
    AVAILABLE = 'AVAILABLE'
    ON_DUTY = 'ON_DUTY'
    OFF_DUTY = 'OFF_DUTY'
    SUSPENDED = 'SUSPENDED'

    STATUS_CHOICES = [
        (AVAILABLE, 'Available'),
        (ON_DUTY, 'On Duty'),
        (OFF_DUTY, 'Off Duty'),
        (SUSPENDED, 'Suspended'),
    ]

    name = models.CharField(max_length=100)
    license_number = models.CharField(max_length=32, unique=True)
    license_expiry = models.DateTimeField()
    authorized_vehicle_types = models.JSONField(
        default=list,
        help_text="Vehicle types this driver may operate, e.g. [\"VAN\", \"TRUCK\"]"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=AVAILABLE)
    safety_score = models.PositiveSmallIntegerField(
        default=100,
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.license_number}, {self.status})"

    def clean(self):
        valid_types = dict(VEHICLE_TYPE_CHOICES)
        types = self.authorized_vehicle_types or []
        if not types:
            raise ValidationError({'authorized_vehicle_types': "At least one vehicle type is required."})
        unknown = [t for t in types if t not in valid_types]
        if unknown:
            raise ValidationError({'authorized_vehicle_types': f"Unknown vehicle types: {unknown}"})

    def is_authorized_for(self, vehicle_type):
        return vehicle_type in (self.authorized_vehicle_types or [])

    def license_valid_at(self, moment=None):
        moment = moment or timezone.now()
        return self.license_expiry > moment

    class Meta:
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['license_expiry']),
        ]


class Cargo(models.Model):
    """
    A consignment waiting to be carried. Linked to a trip at trip creation.
    """
    description = models.CharField(max_length=255)
    weight_kg = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0.01)])
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    assigned_trip = models.ForeignKey(
        'fleet.Trip',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cargo_items'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.description} ({self.weight_kg} kg)"

    @property
    def is_pending(self):
        return self.assigned_trip_id is None

    class Meta:
        ordering = ['-created_at']
        verbose_name_plural = "Cargo"
