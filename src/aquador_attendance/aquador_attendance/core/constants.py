"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "America/Port-au-Prince"

# Elapsed minutes after session start still counted as "present".
PUNCTUALITY_GRACE_MINUTES = 15

# Billing gate: days 1..7 are free, unpaid invoices block from day 8,
# partially paid ones from day 16.
BILLING_GRACE_LAST_DAY = 7
BILLING_PARTIAL_FROM_DAY = 16

DEFAULT_CONNECTION_TIMEOUT_SECONDS = 10
DEFAULT_REPORT_DAYS = 31
