# filehub/config.py

import logging
import os

import dj_database_url
from dotenv import load_dotenv

from .errors import StartupFault

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ORIGINS = ['http://localhost:5173', 'https://portfolio-ypox.onrender.com']
DEFAULT_PORT = 5000
DEFAULT_MAX_UPLOAD_SIZE = 100 * 1024 * 1024  # 100 MiB
STORAGE_BACKENDS = ('filesystem', 's3', 'memory')


def load_env(base_dir):
    """Reads `<base_dir>/.env` without overriding variables already set."""
    load_dotenv(base_dir / '.env')


def database_config(url=None):
    """
    Parses the database connection string into a Django DATABASES entry.
    The service refuses to start without one.
    """
    if url is None:
        url = os.getenv('DATABASE_URL')
    if not url or not url.strip():
        raise StartupFault("DATABASE_URL is not set. Refusing to start without a database connection string.")
    return dj_database_url.parse(url.strip(), conn_max_age=600)


def allowed_origins(raw=None):
    if raw is None:
        raw = os.getenv('ALLOWED_ORIGINS')
    if not raw:
        return list(DEFAULT_ALLOWED_ORIGINS)
    origins = [origin.strip() for origin in raw.split(',') if origin.strip()]
    return origins or list(DEFAULT_ALLOWED_ORIGINS)


def listen_port(raw=None):
    if raw is None:
        raw = os.getenv('PORT')
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise StartupFault(f"PORT must be an integer, got {raw!r}.")


def max_upload_size(raw=None):
    if raw is None:
        raw = os.getenv('MAX_UPLOAD_SIZE')
    if not raw:
        return DEFAULT_MAX_UPLOAD_SIZE
    try:
        value = int(raw)
    except ValueError:
        raise StartupFault(f"MAX_UPLOAD_SIZE must be an integer number of bytes, got {raw!r}.")
    if value <= 0:
        raise StartupFault("MAX_UPLOAD_SIZE must be positive.")
    return value


def storage_backend(raw=None):
    if raw is None:
        raw = os.getenv('FILE_STORAGE_BACKEND', 'filesystem')
    backend = raw.strip().lower()
    if backend not in STORAGE_BACKENDS:
        raise StartupFault(
            f"FILE_STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {raw!r}."
        )
    return backend


def env_flag(name, default='False'):
    return os.getenv(name, default).lower() in ('true', '1', 't')
