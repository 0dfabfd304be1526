import logging
import os
import time

from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask, g, request

from cp_analytics.config import config_map
from cp_analytics.extensions import db, login_manager, migrate, cors

__version__ = '1.0.0'

request_logger = logging.getLogger('cp_analytics.request')

# Directory holding the .env files
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Secrets shorter than this are accepted with a warning
MIN_SECRET_LENGTH = 32


def create_app(config_name=None):
    """Application factory for creating the Flask app instance.

    Args:
        config_name: Configuration name ('development', 'production' or
                     'testing'). Defaults to FLASK_ENV or 'development'.

    Returns:
        Configured Flask application instance.
    """
    # Load environment variables from the appropriate .env file
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    env_file = os.path.join(ROOT_DIR, f'.env.{env}')
    if os.path.exists(env_file):
        load_dotenv(env_file)

    # Also load a local .env if it exists (overrides the environment-specific one)
    dotenv_path = os.path.join(ROOT_DIR, '.env')
    if config_name != 'testing' and os.path.exists(dotenv_path):
        load_dotenv(dotenv_path, override=True)

    # Determine final config name after env files are loaded
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)

    config_class = config_map.get(config_name, config_map['development'])
    # Instantiate after the .env files are loaded so their values apply
    app.config.from_object(config_class())
    # Keep aggregate maps in insertion order on the wire
    app.json.sort_keys = False

    _configure_logging(app)
    validate_config(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(
        app,
        resources={r'/*': {'origins': app.config['CORS_ORIGINS']}},
        supports_credentials=True,
    )

    _register_auth_loaders()

    from cp_analytics.errors import register_error_handlers
    register_error_handlers(app)

    _register_blueprints(app)
    _register_request_logging(app)

    # Create database tables if they don't exist
    with app.app_context():
        db.create_all()

    return app


def validate_config(app):
    """Warn about weak settings; refuse to start production without a JWT secret."""
    secret = app.config.get('JWT_SECRET') or ''
    if not secret:
        if not app.debug and not app.testing:
            raise RuntimeError('JWT_SECRET must be set in production')
        app.logger.warning('JWT_SECRET is not set; tokens cannot be issued')
    elif len(secret) < MIN_SECRET_LENGTH:
        app.logger.warning(
            f'JWT_SECRET should be at least {MIN_SECRET_LENGTH} characters long'
        )

    if app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite') and not app.debug:
        app.logger.warning('Running on SQLite outside development')


def _configure_logging(app):
    """Set up RotatingFileHandler on the root logger."""
    max_bytes = app.config.get('LOG_FILE_MAX_BYTES', 0)
    if not max_bytes:
        return

    log_dir = os.path.join(app.instance_path, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, 'app.log')
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=app.config.get('LOG_FILE_BACKUP_COUNT', 3),
    )
    handler.setFormatter(logging.Formatter(
        app.config.get('LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    ))
    handler.setLevel(logging.INFO)

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.WARNING:
        root.setLevel(logging.INFO)


def _register_auth_loaders():
    """Authenticate API requests from the bearer token."""
    from cp_analytics.models import User
    from cp_analytics.responses import error_response
    from cp_analytics.services.token_service import bearer_token, decode_token

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        token = bearer_token(req.headers.get('Authorization'))
        if token is None:
            return None
        user_id = decode_token(token)
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        if bearer_token(request.headers.get('Authorization')) is None:
            return error_response('UNAUTHORIZED', 'Authentication token required', 401)
        return error_response('INVALID_TOKEN', 'Invalid or expired token', 401)


def _register_request_logging(app):
    """Emit one access line per request with its duration."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get('request_started')
        duration_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        request_logger.info(
            f'{request.method} {request.path} {response.status_code} {duration_ms:.1f}ms'
        )
        return response


def _register_blueprints(app):
    """Register all application blueprints."""
    from cp_analytics.views.auth import auth_bp
    from cp_analytics.views.submissions import submissions_bp
    from cp_analytics.views.analytics import analytics_bp
    from cp_analytics.views.leetcode import leetcode_bp
    from cp_analytics.views.health import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(submissions_bp)
    app.register_blueprint(analytics_bp)
    app.register_blueprint(leetcode_bp)
    app.register_blueprint(health_bp)
