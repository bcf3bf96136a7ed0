"""
utils.py

Configuration and database connection utilities for the Golf Match Log

Provides a function to establish a connection to the Supabase Postgres database
using credentials stored in Streamlit secrets, with environment variables
(loaded from a local .env file) as the fallback.

Dependencies:
- streamlit
- dotenv
- psycopg2

Functions:
- get_setting(name, default=None): Reads one setting from secrets or the environment.
- db_connection(): Returns a psycopg2 connection object to the Supabase database.
- configure_logging(): Sets up the root logger for the app.
"""

import logging
import os

import streamlit as st
from streamlit.errors import StreamlitSecretNotFoundError
from dotenv import load_dotenv
import psycopg2

logger = logging.getLogger(__name__)

REQUIRED_DB_SETTINGS = ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASS")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

load_dotenv(override=False)


def get_setting(name, default=None):
    """
    Looks up a configuration value

    Streamlit secrets win over environment variables, so a deployed app can be
    configured from the Streamlit dashboard while local runs use .env

    Args:
        - name (str): Setting key, e.g. "DB_HOST"
        - default: Value returned when the key is set nowhere

    Returns:
        The configured value, or default
    """
    try:
        if name in st.secrets:
            return st.secrets[name]
    except (FileNotFoundError, StreamlitSecretNotFoundError):
        # No secrets.toml at all; Streamlit raises instead of returning empty
        logger.debug("No Streamlit secrets found, reading %s from the environment", name)
    return os.getenv(name, default)


def db_connection():
    """
    Establishes and returns a connection to the PostgreSQL database

    Reads database connection parameters (host, port, dbname, user, password)
    through get_setting()

    Returns:
        psycopg2.extensions.connection: An open connection to the database

    Raises:
        RuntimeError: If any connection parameter is missing

    Usage:
        with db_connection() as conn:
            # Use conn to perform queries; the transaction commits on exit
            pass
    """
    settings = {key: get_setting(key) for key in REQUIRED_DB_SETTINGS}
    missing = [key for key, value in settings.items() if not value]
    if missing:
        raise RuntimeError(f"Missing database settings: {', '.join(missing)}")

    conn = psycopg2.connect(
        host=settings["DB_HOST"],
        dbname=settings["DB_NAME"],
        user=settings["DB_USER"],
        password=settings["DB_PASS"],
        port=settings["DB_PORT"]
    )
    return conn


def configure_logging():
    level = str(get_setting("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
