# backend/store_management/config.py
from __future__ import annotations
import os


class Config:
    # Single connection string to the backing store.
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///store_management.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = os.environ.get("SQL_ECHO", "0") == "1"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Default for `flask db seed` when no flag is given
    SEED_DEMO_DATA = os.environ.get("SEED_DEMO_DATA", "1") == "1"
