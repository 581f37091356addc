"""
Order Routes

Quotation lifecycle (create, transition, delete) and the order views.
"""

from flask import Blueprint, jsonify

from backoffice.buisness.orders import OrderManager
from backoffice.presentation.routes.helpers import json_body
from backoffice.services.orders import OrderQueryService

orders_bp = Blueprint('orders', __name__, url_prefix='/api')


@orders_bp.route('/quotations', methods=['GET'])
def list_quotations():
    return jsonify(OrderQueryService.list_quotations())


@orders_bp.route('/quotations/<order_id>', methods=['GET'])
def get_order(order_id):
    return jsonify(OrderQueryService.get_order(order_id))


@orders_bp.route('/quotations/create', methods=['POST'])
def create_quotation():
    order = OrderManager().create_order(json_body())
    return jsonify(OrderQueryService.enrich(order)), 201


@orders_bp.route('/quotations/update-status', methods=['POST'])
def update_status():
    """Move an order on: {order_id, status?, updated_products?}"""
    data = json_body()
    result = OrderManager().transition(
        data.get('order_id'),
        data.get('status'),
        data.get('updated_products'),
    )
    return jsonify(result.to_dict())


@orders_bp.route('/quotations/cleanup/all', methods=['DELETE'])
def delete_all_quotations():
    count = OrderManager().delete_all_quotations()
    return jsonify({'message': f'Deleted {count} quotation(s)', 'count': count})


@orders_bp.route('/quotations/<order_id>', methods=['DELETE'])
def delete_order(order_id):
    deleted = OrderManager().delete_order(order_id)
    return jsonify({'message': 'Order deleted', 'deleted': deleted})


@orders_bp.route('/current-orders', methods=['GET'])
def current_orders():
    return jsonify(OrderQueryService.list_current_orders())


@orders_bp.route('/order-history', methods=['GET'])
def order_history():
    return jsonify(OrderQueryService.list_order_history())
