import os

from config.config import DEVICE_SECRET, PUNCH_DEADLINE_SECONDS, SCHOOL_TIMEZONE, db_config, env_bool

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config(default_password="root")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "1")
# Optional: also seed demo roster on startup
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
