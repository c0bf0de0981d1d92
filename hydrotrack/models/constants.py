"""Constants for hydrotrack.

This module centralizes all magic numbers and default values used throughout the application.
"""

# User defaults
DEFAULT_DAILY_WATER_GOAL = 2000  # ml
MAX_DAILY_WATER_GOAL = 20000  # ml

# Intake limits
MAX_INTAKE_AMOUNT = 10000  # ml per record

# Largest value a 64-bit INTEGER column can hold (ids in paths and bodies)
MAX_DB_INTEGER = 2 ** 63 - 1

# Field constraints
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt only hashes the first 72 bytes
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50

# Wire formats (strict patterns, checked before parsing)
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}:\d{2}$"
MONTH_PATTERN = r"^\d{4}-\d{2}$"

# Aggregation
STATS_WINDOW_DAYS = 30
