import os
from dotenv import load_dotenv

# Load .env from project root (same folder as main.py)
load_dotenv()

ENV = os.getenv("ENV", "development")
DEBUG = os.getenv("DEBUG", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# Local single-user app; bind to loopback unless told otherwise.
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

# Feature flags
ENABLE_FOOD_SIMULATOR = os.getenv("ENABLE_FOOD_SIMULATOR", "True").lower() == "true"
ENABLE_SEVERITY_SIMULATOR = os.getenv("ENABLE_SEVERITY_SIMULATOR", "True").lower() == "true"
ENABLE_WEEKLY_REPORT = os.getenv("ENABLE_WEEKLY_REPORT", "True").lower() == "true"
