"""Menu-driven client for a hotel reservation PostgreSQL database."""

__version__ = "0.1.0"
