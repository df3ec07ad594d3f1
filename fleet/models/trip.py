from django.core.validators import MinValueValidator
from django.db import models

from fleet.models.core import Vehicle, Driver


class Trip(models.Model):
    """
    A single dispatch assignment of one vehicle and one driver.

    Status only moves through the transitions in
    ``fleet.services.trip_service``; trips are never deleted.
    """
    DRAFT = 'DRAFT'
    DISPATCHED = 'DISPATCHED'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'

    STATUS_CHOICES = [
        (DRAFT, 'Draft'),
        (DISPATCHED, 'Dispatched'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    TERMINAL_STATUSES = (COMPLETED, CANCELLED)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=DRAFT)
    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name='trips')
    driver = models.ForeignKey(Driver, on_delete=models.PROTECT, related_name='trips')

    # Snapshot at creation; does not follow later cargo edits
    cargo_weight_kg = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0.01)])
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)

    start_odometer_km = models.PositiveIntegerField(null=True, blank=True)
    end_odometer_km = models.PositiveIntegerField(null=True, blank=True)
    revenue = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Trip #{self.pk} {self.origin} -> {self.destination} ({self.status})"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    @property
    def distance_km(self):
        """Distance traveled in kilometers, when both odometer readings exist."""
        if self.start_odometer_km is None or self.end_odometer_km is None:
            return None
        return self.end_odometer_km - self.start_odometer_km

    @property
    def has_odometer_regression(self):
        """End reading below start reading; kept as a data-entry warning."""
        distance = self.distance_km
        return distance is not None and distance < 0

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['status', 'created_at']),
        ]
