import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:5005")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

POLL_INTERVAL_SECONDS = float(os.getenv("POLL_INTERVAL_SECONDS", "6"))
HOST_REFRESH_INTERVAL_SECONDS = float(os.getenv("HOST_REFRESH_INTERVAL_SECONDS", "60"))
MAX_NOTIFICATIONS = int(os.getenv("MAX_NOTIFICATIONS", "30"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///airbrb_client.db")

# Keys in durable client storage
SESSION_STORAGE_KEY = "airbrb_auth"
NOTIFICATIONS_STORAGE_PREFIX = "airbrb_notifications_"
REVIEWS_STORAGE_PREFIX = "airbrb_reviews_"

ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS", "*")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in ALLOWED_ORIGINS_RAW.split(",")
]

# Credentials for the headless watcher (optional; a stored session is reused)
LOGIN_EMAIL = os.getenv("AIRBRB_EMAIL")
LOGIN_PASSWORD = os.getenv("AIRBRB_PASSWORD")
