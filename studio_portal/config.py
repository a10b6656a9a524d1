"""Application configuration module.

Loads configuration from environment variables with sensible defaults
for development.
"""
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


class Config:
    """Base configuration class.

    Reads configuration from environment variables. All sensitive values
    should be set via environment variables, never hardcoded.
    """

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_bool('DEBUG', 'false')

    # Database settings (used by the 'database' store backend)
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        'sqlite:///studio_portal.db'
    )

    # Handle Railway's postgres:// vs postgresql:// URL scheme
    if SQLALCHEMY_DATABASE_URI.startswith('postgres://'):
        SQLALCHEMY_DATABASE_URI = SQLALCHEMY_DATABASE_URI.replace(
            'postgres://', 'postgresql://', 1
        )

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Entity store settings
    # One of: file, memory, database, remote
    STORE_BACKEND = os.environ.get('STORE_BACKEND', 'file')
    DATA_FILE = os.environ.get('DATA_FILE', os.path.join('data', 'db.json'))
    REMOTE_STORE_URL = os.environ.get('REMOTE_STORE_URL', '')
    REMOTE_STORE_TOKEN = os.environ.get('REMOTE_STORE_TOKEN', '')
    REMOTE_STORE_TIMEOUT = int(os.environ.get('REMOTE_STORE_TIMEOUT', '25'))

    # Fall back to bundled seed content for collections never persisted
    SEED_DATA = _env_bool('SEED_DATA', 'true')

    # Admin panel shared password
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'admin123')

    # Static bearer token accepted for server-to-server calls, e.g. from
    # another instance using the remote store backend. Empty disables it.
    SERVICE_TOKEN = os.environ.get('SERVICE_TOKEN', '')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Application settings
    APP_NAME = 'Studio Portal'
    MEETING_URL = os.environ.get('MEETING_URL', 'https://meet.google.com/new')
