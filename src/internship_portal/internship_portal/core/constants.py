"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# MySQL ER_DUP_ENTRY
DUPLICATE_KEY_ERRNO = 1062

DEFAULT_SESSION_DAYS = 7
DEFAULT_INVITE_TTL_HOURS = 72
INVITE_TOKEN_BYTES = 32
MIN_PASSWORD_LENGTH = 8

MIN_ACADEMIC_YEAR = 1
MAX_ACADEMIC_YEAR = 6
