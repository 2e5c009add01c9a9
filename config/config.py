import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("MYSQL_HOST", "localhost"),
        "port": int(os.getenv("MYSQL_PORT", "3306")),
        "user": os.getenv("MYSQL_USER", "root"),
        "password": os.getenv("MYSQL_PASSWORD", default_password),
        "database": os.getenv("MYSQL_DATABASE", "hris_admin"),
    }


def redis_config() -> dict:
    return {
        "host": os.getenv("REDIS_HOST", "localhost"),
        "port": int(os.getenv("REDIS_PORT", "6379")),
        "password": os.getenv("REDIS_PASSWORD") or None,
        "db": int(os.getenv("REDIS_DB", "0")),
    }


def hris_config() -> dict:
    return {
        "base_url": os.getenv("HRIS_API_URL", "http://localhost:8080/api"),
        "username": os.getenv("HRIS_USERNAME", ""),
        "password": os.getenv("HRIS_PASSWORD", ""),
        "timeout": float(os.getenv("HRIS_TIMEOUT", "30")),
    }


DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
