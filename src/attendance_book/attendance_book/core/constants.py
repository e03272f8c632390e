"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

DEFAULT_LOCK_COOLDOWN_HOURS = 20
DEFAULT_HISTORY_POLL_SECONDS = 60
MIN_PASSWORD_LENGTH = 6

PHONE_COUNTRY_CODE = "998"
PHONE_MAX_DIGITS = 12

AVATAR_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp"})
