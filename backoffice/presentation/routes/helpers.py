"""Request helpers shared by the JSON routes"""

from flask import request

from backoffice.buisness.core.errors import ValidationError


def json_body() -> dict:
    """Request body as a dict; anything else is a validation error."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
