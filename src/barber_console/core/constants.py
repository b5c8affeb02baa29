"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CLIENT_SESSION_KEY = "barber_client"
ADMIN_SESSION_KEY = "barber_admin"
SELECTION_SESSION_KEY = "attendance_selection"

DEFAULT_POLL_INTERVAL_SECONDS = 5
DEFAULT_API_TIMEOUT_SECONDS = 10
DEFAULT_SERVICE_DURATION_MINUTES = 30
DEFAULT_RECENT_ACTIVITIES = 5
INACTIVITY_DAYS = 45

SHOP_UTC_OFFSET_HOURS = -3
DOCUMENT_LENGTH = 11
