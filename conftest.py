# type: ignore
"""Point the service at a private in-memory database before anything imports it."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
