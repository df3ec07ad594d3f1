from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from fleet.models.core import Vehicle


class FuelLog(models.Model):
    """
    Model for tracking refueling. Append-only.
    """
    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name='fuel_logs')
    trip = models.ForeignKey(
        'fleet.Trip',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='fuel_logs'
    )

    liters = models.DecimalField(max_digits=8, decimal_places=2, validators=[MinValueValidator(0.01)])
    cost = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.vehicle.license_plate} - {self.date.strftime('%Y-%m-%d')} ({self.liters} L)"

    class Meta:
        ordering = ['-date']


class MaintenanceLog(models.Model):
    """
    Model for tracking maintenance work. Logging one puts the vehicle in the shop.
    """
    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name='maintenance_logs')
    description = models.TextField()
    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    performed_at = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.vehicle.license_plate} - {self.performed_at.strftime('%Y-%m-%d')}"

    class Meta:
        ordering = ['-performed_at']


class Expense(models.Model):
    """
    Any other operating expense charged to a vehicle (tolls, insurance, permits).
    """
    vehicle = models.ForeignKey(Vehicle, on_delete=models.PROTECT, related_name='expenses')
    description = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    date = models.DateTimeField(default=timezone.now)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.vehicle.license_plate} - {self.description} ({self.amount})"

    class Meta:
        ordering = ['-date']
