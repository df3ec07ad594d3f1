"""
Fleet reporting: cost aggregation, monthly financials and on-demand alerts.
"""
