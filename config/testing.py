import os

from config import parse_weekdays

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://store.test"),
    "timeout_seconds": 1.0,
}

REGULAR_WEEKDAYS = parse_weekdays("0,1,2,3,4,5")

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
