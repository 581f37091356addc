"""
API key boundary check

Not a user model: when API_KEY is configured every /api request must present
it in the X-API-Key header.
"""

import hmac

from flask import current_app, jsonify, request

from backoffice.logger import get_logger

logger = get_logger("backoffice.auth")

API_KEY_HEADER = 'X-API-Key'


def check_api_key():
    """before_request hook; returns a 401 response when the key is missing or wrong"""
    expected = current_app.config.get('API_KEY')
    if not expected or not request.path.startswith('/api'):
        return None

    supplied = request.headers.get(API_KEY_HEADER, '')
    if hmac.compare_digest(supplied.encode(), expected.encode()):
        return None

    logger.warning(f"Rejected request to {request.path} from {request.remote_addr}: bad or missing API key")
    return jsonify({"error": "Unauthorized"}), 401
