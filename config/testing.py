import os

from config.config import SCHOOL_TIMEZONE, db_config, env_bool

SECRET_KEY = "test-secret"

DB_CONFIG = db_config(default_password="12345")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DEVICE_SECRET = ""
PUNCH_DEADLINE_SECONDS = 5.0

AUTO_INIT_DB = env_bool("AUTO_INIT_DB", "0")
AUTO_SEED_DB = env_bool("AUTO_SEED_DB", "0")
