"""Settings shared by every environment module, read from the environment."""

import os


def env_bool(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


def db_config(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "school_attendance"),
        "connection_timeout": int(os.getenv("DB_CONNECTION_TIMEOUT", "3")),
    }


SCHOOL_TIMEZONE = os.getenv("SCHOOL_TIMEZONE", "Asia/Dhaka")

# Shared secret readers send in X-Device-Token. Empty disables the check.
DEVICE_SECRET = os.getenv("DEVICE_SECRET", "").strip()

# Budget for one punch request (device lookup through the attendance write).
PUNCH_DEADLINE_SECONDS = float(os.getenv("PUNCH_DEADLINE_SECONDS", "5"))
