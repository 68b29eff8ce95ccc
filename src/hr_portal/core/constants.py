"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_VACATION_ENTITLEMENT = 30
PROBATION_REMINDER_DAYS_BEFORE_END = 30
PROBATION_CHECK_INTERVAL_SECONDS = 60 * 60
ABSENCES_LINK = "/absences"
CERTIFICATE_PREFIX = "absences"
