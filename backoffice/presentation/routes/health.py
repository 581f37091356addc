"""Liveness and database check"""

from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from backoffice import db
from backoffice.logger import get_logger

logger = get_logger("backoffice.routes.health")

health_bp = Blueprint('health', __name__, url_prefix='/api')


@health_bp.route('/health', methods=['GET'])
def health():
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Health check database failure: {e}")
        return jsonify({'status': 'unhealthy', 'database': 'unavailable'}), 503
    return jsonify({'status': 'ok', 'database': 'ok'})
