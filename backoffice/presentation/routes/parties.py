"""
Party Routes

Customer and supplier directories share one set of views; each gets its own
blueprint.
"""

from flask import Blueprint, jsonify

from backoffice.buisness.core.validation import require_text
from backoffice.buisness.parties import CustomerDirectory, SupplierDirectory
from backoffice.presentation.routes.helpers import json_body


def _make_blueprint(name, directory_class):
    bp = Blueprint(name, __name__, url_prefix=f'/api/{name}')

    @bp.route('', methods=['GET'])
    def list_parties():
        return jsonify([party.to_dict() for party in directory_class().list()])

    @bp.route('/<party_id>', methods=['GET'])
    def get_party(party_id):
        return jsonify(directory_class().get_by_id(party_id).to_dict())

    @bp.route('', methods=['POST'])
    def create_party():
        party = directory_class().create(json_body())
        return jsonify(party.to_dict()), 201

    @bp.route('/delete', methods=['POST'])
    def delete_party():
        party_id = require_text(json_body().get('id'), 'id')
        deleted = directory_class().delete(party_id)
        return jsonify({'message': f'{directory_class.label} deleted', 'deleted': deleted})

    return bp


customers_bp = _make_blueprint('customers', CustomerDirectory)
suppliers_bp = _make_blueprint('suppliers', SupplierDirectory)
