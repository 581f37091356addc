"""
WIP Routes

Create production batches (consuming raw materials) and complete them
(crediting outputs).
"""

from flask import Blueprint, jsonify, request

from backoffice.buisness.production import WipBatchManager
from backoffice.presentation.routes.helpers import json_body

wip_bp = Blueprint('wip', __name__, url_prefix='/api/wip')


@wip_bp.route('', methods=['GET'])
def list_batches():
    batches = WipBatchManager().list_batches(request.args.get('status'))
    return jsonify([batch.to_dict() for batch in batches])


@wip_bp.route('/<batch_number>', methods=['GET'])
def get_batch(batch_number):
    return jsonify(WipBatchManager().get_batch(batch_number).to_dict())


@wip_bp.route('', methods=['POST'])
def create_batch():
    data = json_body()
    batch = WipBatchManager().create_batch(
        data.get('batch_number'),
        data.get('raw_materials'),
        data.get('output', []),
        data.get('status', 'in_progress'),
        data.get('start_date'),
        notes=data.get('notes'),
    )
    return jsonify({'message': 'WIP batch created', 'batch': batch.summary()}), 201


@wip_bp.route('/<batch_number>', methods=['PUT'])
def complete_batch(batch_number):
    data = json_body()
    batch = WipBatchManager().complete_batch(
        batch_number,
        status=data.get('status', 'completed'),
        end_date=data.get('end_date'),
        output=data.get('output'),
    )
    return jsonify({'message': f'WIP batch {batch.status}', 'batch': batch.summary()})
