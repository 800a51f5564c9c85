"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_M = 6_371_000
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_ADMIN_LIST_LIMIT = 1000
MIN_PASSWORD_LENGTH = 6
MAX_UPLOAD_BYTES = 50 * 1024 * 1024
