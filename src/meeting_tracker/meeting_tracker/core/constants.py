"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

DEFAULT_TOKEN_HOURS = 24
MIN_PASSWORD_LENGTH = 6

# Fallbacks used when a legacy meeting references a unit that no longer exists.
DEFAULT_PROJECT = "1"
DEFAULT_UNIT_TYPE = "group"

MAX_IMAGES_PER_UPLOAD = 5
MAX_FILES_PER_UPLOAD = 10
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

SAMPLE_PROJECT_COUNT = 10

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_NAME = "System Administrator"
