import os

from .config import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    LOG_LEVEL,
    db_config,
    env_flag,
    hris_config,
    redis_config,
)

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config()
REDIS_CONFIG = redis_config()
HRIS_CONFIG = hris_config()

DEBUG = False

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
WARM_CACHES = env_flag("WARM_CACHES", "1")
