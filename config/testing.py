import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://backend.test/api/v1"),
    "timeout": 1.0,
    "token": "",
}

PAGE_SIZE = 5

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
