import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./medislot.db")

# Frontend origins allowed to call the API (mobile web build + doctor/admin portal)
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:8081,http://localhost:19006,http://localhost:3000",
).split(",")

# Bare phone numbers are stored with this prefix (e.g. "9876543210" -> "+919876543210")
DEFAULT_COUNTRY_CODE = os.getenv("DEFAULT_COUNTRY_CODE", "+91")

# Flat fee added on top of the consultation price in booking quotes
PLATFORM_FEE = int(os.getenv("PLATFORM_FEE", "50"))

# Expo push notifications
EXPO_PUSH_URL = os.getenv("EXPO_PUSH_URL", "https://exp.host/--/api/v2/push/send")
PUSH_NOTIFICATIONS_ENABLED = os.getenv("PUSH_NOTIFICATIONS_ENABLED", "true").lower() == "true"
PUSH_TIMEOUT_SECONDS = float(os.getenv("PUSH_TIMEOUT_SECONDS", "10"))

# Rate limiting (requires Redis when enabled)
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "false").lower() == "true"
BOOKING_RATE_LIMIT = int(os.getenv("BOOKING_RATE_LIMIT", "30"))
BOOKING_RATE_WINDOW = int(os.getenv("BOOKING_RATE_WINDOW", "60"))
