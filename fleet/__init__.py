"""
Fleet app.

Vehicles, drivers, cargo, trips and their cost logs, plus the trip
lifecycle that keeps them consistent.
"""
