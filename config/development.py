import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://127.0.0.1:8000/api/v1"),
    "timeout": float(os.getenv("API_TIMEOUT", "10")),
    "token": os.getenv("API_TOKEN", ""),
}

# Rows per page in management tables (0 disables pagination)
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10")) or None

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
