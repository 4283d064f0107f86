# config.py
# Connection settings and tunables; each value can be overridden from the environment.
import os

DB_CONFIG = {
    "dbname": os.environ.get("HOTEL_DB_NAME", "hotel"),
    "user": os.environ.get("HOTEL_DB_USER", "postgres"),
    "password": os.environ.get("HOTEL_DB_PASSWORD", ""),
    "host": os.environ.get("HOTEL_DB_HOST", "localhost"),
    "port": os.environ.get("HOTEL_DB_PORT", "5432"),
}

# Hotels closer than this (euclidean, lat/long units) are listed
SEARCH_RADIUS = float(os.environ.get("HOTEL_SEARCH_RADIUS", "30"))

# Row cap for the "recent" / "top" listings
RECENT_LIMIT = int(os.environ.get("HOTEL_RECENT_LIMIT", "5"))

# Booking and update dates are stored as mm/dd/yyyy text
DATE_FORMAT = "%m/%d/%Y"

SECRET_KEY = os.environ.get("HOTEL_SECRET_KEY", "supersecretkey")

LOG_LEVEL = os.environ.get("HOTEL_LOG_LEVEL", "WARNING")


def load_db_config(**overrides):
    """Return a copy of DB_CONFIG with every non-None override applied."""
    config = dict(DB_CONFIG)
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config
