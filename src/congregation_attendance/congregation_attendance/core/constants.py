"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Lower bounds (absence counts) of each frequency tier. REGULAR always starts at 0.
DEFAULT_ATTENTION_FLOOR = 1
DEFAULT_LOW_FLOOR = 3
DEFAULT_CRITICAL_FLOOR = 5

# A member enters the pastoral follow-up list once absences reach this count.
FOLLOW_UP_ABSENCE_FLOOR = 3

DEFAULT_ACCESS_PASSWORD = "123456"

YEAR_MONTH_FORMAT = "%Y-%m"
ISO_DATE_FORMAT = "%Y-%m-%d"

# Value the presentation layer sends to clear a status. Never stored.
NOT_REGISTERED = "NOT_REGISTERED"

WHATSAPP_URL = "https://wa.me/{phone}?text={text}"
