"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

CARD_NUMBER_PAD_WIDTH = 10
DEFAULT_PUNCH_DEADLINE_SECONDS = 5.0
DEFAULT_SCHOOL_TIMEZONE = "Asia/Dhaka"
DEFAULT_DB_CONNECTION_TIMEOUT = 3

MESSAGE_FIRST_PUNCH = "First punch - attendance recorded"
MESSAGE_ALREADY_MARKED = "Punch recorded (attendance already marked)"
MESSAGE_PUNCH_OUT = "Punch out recorded"
MESSAGE_ADDITIONAL_PUNCH = "Additional punch recorded"
