from decimal import Decimal

# Reporting precision, applied only when building output objects
MONEY_QUANTUM = Decimal('0.01')     # 2 dp
PERCENT_QUANTUM = Decimal('0.1')    # 1 dp, also used for km/l

MONTH_KEY_FORMAT = '%Y-%m'

# Defaults when the FLEET_* settings are absent
DEFAULT_TRIP_OVERDUE_HOURS = 24
DEFAULT_LICENSE_EXPIRY_WARNING_DAYS = 7
DEFAULT_UTILIZATION_WINDOW_DAYS = 30

# --- Alerts ---
LEVEL_CRITICAL = 'critical'
LEVEL_WARNING = 'warning'

# Lower sorts first
LEVEL_RANK = {
    LEVEL_CRITICAL: 0,
    LEVEL_WARNING: 1,
}
