"""
Routes package for the back-office API
Organized by business area; every route is a thin JSON adapter over a manager
or a read-only service
"""

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from backoffice import db
from backoffice.auth import check_api_key
from backoffice.buisness.core.errors import BackofficeError
from backoffice.logger import get_logger

logger = get_logger("backoffice.routes")


def register_error_handlers(app):
    """Map business exceptions to their status codes; persistence failures to 500"""

    @app.errorhandler(BackofficeError)
    def handle_backoffice_error(error):
        if error.status_code >= 500:
            logger.error(f"{error.__class__.__name__}: {error.message}")
        else:
            logger.debug(f"{error.__class__.__name__} ({error.status_code}): {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.error(f"Database error: {error}", exc_info=True)
        return jsonify({"error": "Database error"}), 500


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .inventory import inventory_bp
    from .production import wip_bp
    from .orders import orders_bp
    from .parties import customers_bp, suppliers_bp
    from .health import health_bp

    app.register_blueprint(inventory_bp)
    app.register_blueprint(wip_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(suppliers_bp)
    app.register_blueprint(health_bp)

    app.before_request(check_api_key)
    register_error_handlers(app)

    logger.debug("All route blueprints registered successfully")
