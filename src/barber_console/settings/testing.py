import os

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://api.test/"),
    "timeout": 1.0,
}

POLL_INTERVAL_SECONDS = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
