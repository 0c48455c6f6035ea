from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from itassets.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "500 per hour"],
    storage_uri="memory://"  # Use Redis in production for distributed systems
)


def _env_bool(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(test_config=None):
    from pathlib import Path

    app = Flask(__name__)

    logger = get_logger("itassets")
    logger.info("Initializing Flask application")

    # SECURITY: Require SECRET_KEY in environment - no fallback
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # Prefer an explicit DATABASE_URL; otherwise keep the SQLite database in instance/
    base_dir = Path(__file__).parent.parent
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'itassets.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Allocation transactions
    app.config['TRANSACTION_MAX_ATTEMPTS'] = int(os.environ.get('TRANSACTION_MAX_ATTEMPTS', '5'))
    app.config['TRANSACTION_RETRY_BACKOFF_SECONDS'] = float(os.environ.get('TRANSACTION_RETRY_BACKOFF_SECONDS', '0.05'))

    # Rate limiting
    app.config['RATELIMIT_ENABLED'] = _env_bool('RATELIMIT_ENABLED', 'True')
    app.config['ALLOCATION_RATE_LIMIT'] = os.environ.get('ALLOCATION_RATE_LIMIT', '60 per minute')

    if test_config:
        app.config.update(test_config)

    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if app.config['TRANSACTION_MAX_ATTEMPTS'] < 1:
        raise RuntimeError("TRANSACTION_MAX_ATTEMPTS must be at least 1")

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from itassets.data.core.site import Site
    from itassets.data.core.asset import Asset
    from itassets.data.finance.supplier import Supplier
    from itassets.data.finance.invoice import Invoice

    logger.debug("Models imported and registered")

    from itassets.presentation.routes import init_app as init_routes
    init_routes(app)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    logger.info("Flask application initialization complete")

    return app
