"""
FleetOps project package.

Django settings and URL configuration for the fleet operations service.
"""

__version__ = '0.1.0'
