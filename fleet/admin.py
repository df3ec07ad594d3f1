from django.contrib import admin

from .models import Vehicle, Driver, Cargo, Trip, FuelLog, MaintenanceLog, Expense


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'license_plate', 'vehicle_type', 'max_load_capacity_kg',
        'status', 'odometer_km', 'region'
    )
    list_filter = ('status', 'vehicle_type', 'region')
    search_fields = ('name', 'model', 'license_plate')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'model', 'license_plate', 'vehicle_type', 'region', 'status')
        }),
        ('Specifications', {
            'fields': ('max_load_capacity_kg', 'odometer_km', 'acquisition_cost')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ('name', 'license_number', 'license_expiry', 'status', 'safety_score')
    list_filter = ('status',)
    search_fields = ('name', 'license_number')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(Cargo)
class CargoAdmin(admin.ModelAdmin):
    list_display = ('description', 'weight_kg', 'origin', 'destination', 'assigned_trip')
    search_fields = ('description', 'origin', 'destination')
    raw_id_fields = ('assigned_trip',)


@admin.register(Trip)
class TripAdmin(admin.ModelAdmin):
    list_display = ('id', 'vehicle', 'driver', 'status', 'cargo_weight_kg', 'created_at', 'completed_at')
    list_filter = ('status', 'created_at')
    search_fields = ('vehicle__license_plate', 'driver__name', 'origin', 'destination')
    readonly_fields = ('status', 'start_odometer_km', 'end_odometer_km', 'created_at', 'completed_at', 'updated_at')
    raw_id_fields = ('vehicle', 'driver')
    date_hierarchy = 'created_at'
    fieldsets = (
        ('Trip Information', {
            'fields': ('vehicle', 'driver', 'status', 'cargo_weight_kg', 'revenue')
        }),
        ('Route', {
            'fields': ('origin', 'destination')
        }),
        ('Distance', {
            'fields': ('start_odometer_km', 'end_odometer_km')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'completed_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )


@admin.register(FuelLog)
class FuelLogAdmin(admin.ModelAdmin):
    list_display = ('vehicle', 'trip', 'date', 'liters', 'cost')
    list_filter = ('date',)
    search_fields = ('vehicle__license_plate',)
    readonly_fields = ('created_at',)
    raw_id_fields = ('vehicle', 'trip')
    date_hierarchy = 'date'


@admin.register(MaintenanceLog)
class MaintenanceLogAdmin(admin.ModelAdmin):
    list_display = ('vehicle', 'performed_at', 'cost')
    search_fields = ('vehicle__license_plate', 'description')
    readonly_fields = ('created_at',)
    raw_id_fields = ('vehicle',)
    date_hierarchy = 'performed_at'


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ('vehicle', 'date', 'amount', 'description')
    search_fields = ('vehicle__license_plate', 'description')
    readonly_fields = ('created_at',)
    raw_id_fields = ('vehicle',)
    date_hierarchy = 'date'
