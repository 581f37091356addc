from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from backoffice.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["2000 per day", "300 per hour"],
    storage_uri="memory://"  # Use Redis when running several workers
)


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    """
    Application factory.

    Args:
        config_overrides (dict, optional): Values applied on top of the
            environment-derived configuration (tests use this for an
            in-memory database).
    """
    from pathlib import Path

    app = Flask(__name__)

    logger = get_logger("backoffice")
    logger.info("Initializing Flask application")

    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # Prefer an explicit DATABASE_URL; otherwise keep the SQLite file inside
    # the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        instance_dir = Path(__file__).parent.parent / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'backoffice.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Boundary check: when set, every /api request must carry X-API-Key
    app.config['API_KEY'] = os.environ.get('API_KEY') or None

    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED', 'True')
    app.json.sort_keys = False

    if config_overrides:
        app.config.update(config_overrides)

    # SECURITY: Require SECRET_KEY - no fallback
    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if not app.config['API_KEY']:
        logger.warning("API_KEY not set - /api requests are not checked at the boundary")

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from backoffice.data.inventory.product import Product
    from backoffice.data.inventory.stock_movement import StockMovement
    from backoffice.data.orders.order_header import OrderHeader
    from backoffice.data.orders.order_line import OrderLine
    from backoffice.data.production.wip_batch import WipBatch
    from backoffice.data.production.wip_batch_item import WipBatchItem
    from backoffice.data.core.parties.customer import Customer
    from backoffice.data.core.parties.supplier import Supplier

    logger.debug("Models imported and registered")

    from backoffice.presentation.routes import init_app as init_routes
    init_routes(app)

    from backoffice.utils.stock_report import register_cli
    register_cli(app)

    logger.info("Flask application initialization complete")

    return app
