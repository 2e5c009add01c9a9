import os

from .config import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    db_config,
    env_flag,
    hris_config,
    redis_config,
)

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config()
REDIS_CONFIG = redis_config()
HRIS_CONFIG = hris_config()

DEBUG = env_flag("DEBUG", "1")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS) and make sure the default admin exists
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Fill HRIS and local caches at startup
WARM_CACHES = env_flag("WARM_CACHES", "0")
