# taskhub/config/settings.py
# Application configuration read from the environment (.env supported)

import os
import logging
from typing import List
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_DEV_SECRET_KEY = "taskhub-dev-secret-change-me"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Settings:
    """Settings for the API server, the scripts and the client data layer"""

    # Database
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./taskhub.db')
    DATABASE_SSLMODE = os.getenv('DATABASE_SSLMODE', 'require')
    AUTO_CREATE_TABLES = _env_bool('AUTO_CREATE_TABLES', 'true')

    # Tokens
    SECRET_KEY = os.getenv('SECRET_KEY') or _DEV_SECRET_KEY
    ALGORITHM = os.getenv('ALGORITHM', 'HS256')
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 60 * 24))

    # HTTP server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '8000'))
    RELOAD = _env_bool('RELOAD', 'true')
    CORS_ORIGINS = os.getenv(
        'CORS_ORIGINS',
        'http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000',
    )

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Client data layer
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:8000')
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', 10))
    TOKEN_FILE = os.getenv('TASKHUB_TOKEN_FILE', os.path.join(os.path.expanduser('~'), '.taskhub', 'token.json'))

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Split the comma separated CORS_ORIGINS value"""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(',') if origin.strip()]

    @classmethod
    def is_postgres(cls) -> bool:
        return cls.DATABASE_URL.lower().startswith(('postgres://', 'postgresql'))

    @classmethod
    def is_sqlite(cls) -> bool:
        return cls.DATABASE_URL.lower().startswith('sqlite')

    @classmethod
    def warn_insecure_defaults(cls) -> None:
        if cls.SECRET_KEY == _DEV_SECRET_KEY:
            logger.warning("SECRET_KEY is not set, using the development key")
