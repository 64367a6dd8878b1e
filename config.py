"""
Configuration for the Webz.io fetcher.

Values come from the environment; a local .env file is loaded first.
"""

import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()

DEFAULT_BASE_URL = "https://api.webz.io"
DEFAULT_REQUEST_DELAY = 1.0  # seconds between pages
DEFAULT_REQUEST_TIMEOUT = 30  # seconds


class ConfigError(Exception):
    """Raised when required configuration is missing."""


def api_token():
    token = os.getenv("WEBZIO_API_TOKEN") or os.getenv("WEBZ_API_TOKEN")
    if not token:
        raise ConfigError("WEBZIO_API_TOKEN environment variable is required")
    return token


def api_base_url():
    return os.getenv("WEBZ_API_BASE_URL") or DEFAULT_BASE_URL


def request_delay():
    return float(os.getenv("WEBZ_REQUEST_DELAY", DEFAULT_REQUEST_DELAY))


def request_timeout():
    return float(os.getenv("WEBZ_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))


def database_url():
    """DATABASE_URL wins; otherwise assemble a Postgres URL from DB_* vars."""
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    return URL.create(
        "postgresql+psycopg2",
        username=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASSWORD", "postgres"),
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "webz_data"),
    )
