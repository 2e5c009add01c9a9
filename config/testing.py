from .config import db_config, hris_config, redis_config

SECRET_KEY = "test-secret"

DB_CONFIG = db_config()
REDIS_CONFIG = redis_config()
HRIS_CONFIG = hris_config()

DEFAULT_ADMIN_EMAIL = ""
DEFAULT_ADMIN_PASSWORD = ""
LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
WARM_CACHES = False
