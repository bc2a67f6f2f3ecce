import os

from config import parse_weekdays

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Attendance store (REST API)
API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:5000"),
    "timeout_seconds": float(os.getenv("API_TIMEOUT_SECONDS", "20")),
}

# Monday..Saturday
REGULAR_WEEKDAYS = parse_weekdays(os.getenv("REGULAR_WEEKDAYS", "0,1,2,3,4,5"))

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
