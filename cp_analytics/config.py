import os


def _database_uri(default):
    # Hosted Postgres providers hand out DATABASE_URL with the legacy scheme
    uri = os.environ.get('SQLALCHEMY_DATABASE_URI') or os.environ.get('DATABASE_URL')
    if not uri:
        return default
    if uri.startswith('postgres://'):
        uri = 'postgresql://' + uri[len('postgres://'):]
    return uri


def _split_origins(value):
    return [o.strip() for o in value.split(',') if o.strip()]


class BaseConfig:
    """Base configuration shared across all environments.

    Environment-backed settings are read when the config is instantiated,
    so values from ``.env`` files loaded by ``create_app`` are picked up.
    """

    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_ALGORITHM = 'HS256'
    LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

    default_database_uri = 'sqlite:///dev.db'
    default_log_file_max_bytes = 0

    def __init__(self):
        # Flask core
        self.SECRET_KEY = os.environ.get('SECRET_KEY', 'fallback-secret-key-change-me')

        # Database
        self.SQLALCHEMY_DATABASE_URI = _database_uri(self.default_database_uri)

        # Token auth
        self.JWT_SECRET = os.environ.get('JWT_SECRET', '')
        self.JWT_EXPIRATION_HOURS = int(os.environ.get('JWT_EXPIRATION_HOURS', 24 * 7))

        # CORS: Vite dev server, local frontend, Vercel previews, plus FRONTEND_URL
        self.FRONTEND_URL = os.environ.get('FRONTEND_URL', '')
        self.CORS_ORIGINS = _split_origins(
            os.environ.get(
                'CORS_ORIGINS',
                r'http://localhost:5173,http://localhost:3000,https://.*\.vercel\.app',
            )
        ) + ([self.FRONTEND_URL] if self.FRONTEND_URL else [])

        # LeetCode proxy
        self.LEETCODE_API_BASE = os.environ.get(
            'LEETCODE_API_BASE', 'https://alfa-leetcode-api.onrender.com'
        )
        self.LEETCODE_TIMEOUT = float(os.environ.get('LEETCODE_TIMEOUT', '15'))
        self.LEETCODE_RATE_LIMIT = float(os.environ.get('LEETCODE_RATE_LIMIT', '0.2'))
        self.LEETCODE_MAX_RETRIES = int(os.environ.get('LEETCODE_MAX_RETRIES', '2'))

        # Logging
        self.LOG_FILE_MAX_BYTES = int(
            os.environ.get('LOG_FILE_MAX_BYTES', str(self.default_log_file_max_bytes))
        )
        self.LOG_FILE_BACKUP_COUNT = int(os.environ.get('LOG_FILE_BACKUP_COUNT', '3'))


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    DEBUG = True

    def __init__(self):
        super().__init__()
        self.JWT_SECRET = self.JWT_SECRET or 'dev-jwt-secret-change-in-production'


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    DEBUG = False
    default_database_uri = 'sqlite:///prod.db'
    default_log_file_max_bytes = 5 * 1024 * 1024


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True

    def __init__(self):
        super().__init__()
        self.SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
        self.SECRET_KEY = 'test-secret-key'
        self.JWT_SECRET = 'test-jwt-secret-that-is-long-enough-for-hs256'
        self.LEETCODE_API_BASE = 'https://leetcode.test'
        self.LEETCODE_RATE_LIMIT = 0.0
        self.LEETCODE_MAX_RETRIES = 1
        self.LOG_FILE_MAX_BYTES = 0


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
