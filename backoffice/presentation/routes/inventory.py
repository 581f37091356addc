"""
Inventory Routes

Product catalog, stock adjustments, valuation report and movement history.
"""

from flask import Blueprint, jsonify, request

from backoffice.buisness.core.errors import ValidationError
from backoffice.buisness.inventory import ProductCatalog
from backoffice.presentation.routes.helpers import json_body
from backoffice.services.inventory import InventoryMovementService, InventoryReportService
from backoffice.logger import get_logger

logger = get_logger("backoffice.routes.inventory")

inventory_bp = Blueprint('inventory', __name__, url_prefix='/api/inventory')


@inventory_bp.route('', methods=['GET'])
def list_products():
    products = ProductCatalog().list_products()
    return jsonify([product.to_dict() for product in products])


@inventory_bp.route('/report', methods=['GET'])
def inventory_report():
    return jsonify(InventoryReportService.get_report())


@inventory_bp.route('/search', methods=['GET'])
def search_products():
    products = ProductCatalog().search_products(request.args.get('query'))
    return jsonify([product.to_dict() for product in products])


@inventory_bp.route('/movements', methods=['GET'])
def list_movements():
    """Movement log; optional filters: product_code, movement_type, limit"""
    limit = request.args.get('limit')
    if limit is not None:
        if not limit.isdigit() or int(limit) < 1:
            raise ValidationError("'limit' must be a positive integer")
        limit = int(limit)
    return jsonify(InventoryMovementService.list_movements(
        request.args.get('product_code'),
        request.args.get('movement_type'),
        limit,
    ))


@inventory_bp.route('', methods=['POST'])
def add_product():
    product = ProductCatalog().add_product(json_body())
    return jsonify(product.to_dict()), 201


@inventory_bp.route('/update', methods=['POST'])
def adjust_stock():
    """Adjust stock by a signed delta: {product_code, qtyDelta, create_if_missing?}"""
    data = json_body()
    create_if_missing = data.get('create_if_missing', False)
    if not isinstance(create_if_missing, bool):
        raise ValidationError("'create_if_missing' must be a boolean")
    product = ProductCatalog().adjust_stock(
        data.get('product_code'),
        data.get('qtyDelta'),
        create_if_missing=create_if_missing,
        details=data,
        notes=data.get('notes'),
    )
    return jsonify(product.to_dict())


@inventory_bp.route('/<product_code>', methods=['GET'])
def get_product(product_code):
    return jsonify(ProductCatalog().get_product(product_code).to_dict())


@inventory_bp.route('/<product_code>', methods=['PUT'])
def update_product(product_code):
    product = ProductCatalog().update_product_fields(product_code, json_body())
    return jsonify(product.to_dict())


@inventory_bp.route('/<product_code>', methods=['DELETE'])
def delete_product(product_code):
    product = ProductCatalog().delete_product(product_code)
    return jsonify({'deleted': product.to_dict()})
