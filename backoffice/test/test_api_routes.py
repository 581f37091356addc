"""
HTTP adapter tests
Status mapping, request shapes and the API key check
"""


def add_product(client, code='RM001', quantity=100, **extra):
    body = {'product_code': code, 'name': f'Product {code}', 'price': 2.0, 'quantity': quantity}
    body.update(extra)
    return client.post('/api/inventory', json=body)


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok', 'database': 'ok'}


def test_product_crud(client):
    assert add_product(client).status_code == 201
    assert add_product(client).status_code == 409

    response = client.get('/api/inventory/RM001')
    assert response.get_json()['quantity'] == 100

    response = client.put('/api/inventory/RM001', json={'name': 'Renamed'})
    assert response.status_code == 200
    assert response.get_json()['name'] == 'Renamed'

    assert client.put('/api/inventory/NOPE', json={'name': 'x'}).status_code == 404
    assert client.get('/api/inventory/NOPE').status_code == 404

    assert client.delete('/api/inventory/RM001').status_code == 200
    assert client.delete('/api/inventory/RM001').status_code == 404
    assert client.get('/api/inventory').get_json() == []


def test_add_product_validation_error(client):
    response = client.post('/api/inventory', json={'name': 'no code'})
    assert response.status_code == 400
    assert 'product_code' in response.get_json()['error']


def test_non_object_body_is_rejected(client):
    response = client.post('/api/inventory', json=[1, 2, 3])
    assert response.status_code == 400


def test_adjust_stock(client):
    add_product(client)
    response = client.post('/api/inventory/update', json={'product_code': 'RM001', 'qtyDelta': -30})
    assert response.status_code == 200
    assert response.get_json()['quantity'] == 70

    response = client.post('/api/inventory/update', json={'product_code': 'NEW', 'qtyDelta': 5})
    assert response.status_code == 404

    response = client.post('/api/inventory/update',
                           json={'product_code': 'NEW', 'qtyDelta': 5, 'create_if_missing': True})
    assert response.status_code == 200
    assert response.get_json()['name'] == 'Unnamed Product'
    assert response.get_json()['quantity'] == 5

    response = client.post('/api/inventory/update', json={'product_code': 'RM001', 'qtyDelta': 'ten'})
    assert response.status_code == 400


def post_raw(client, url, body):
    return client.post(url, data=body, content_type='application/json')


def test_non_finite_numbers_are_rejected(client):
    add_product(client)

    response = post_raw(client, '/api/inventory/update', '{"product_code": "RM001", "qtyDelta": NaN}')
    assert response.status_code == 400
    response = post_raw(client, '/api/inventory/update', '{"product_code": "RM001", "qtyDelta": Infinity}')
    assert response.status_code == 400
    assert client.get('/api/inventory/RM001').get_json()['quantity'] == 100

    response = post_raw(client, '/api/quotations/create', (
        '{"order_id": "PO-1", "party_id": "S1", "type": "purchase",'
        ' "products": [{"product_code": "Z", "quantity_ordered": NaN}]}'
    ))
    assert response.status_code == 400
    assert client.get('/api/quotations').get_json() == []

    response = post_raw(client, '/api/inventory', '{"product_code": "RM002", "name": "Bolt", "quantity": -Infinity}')
    assert response.status_code == 400


def test_malformed_product_fields_are_rejected(client):
    response = add_product(client, 'RM001', 10, is_raw_material='yes')
    assert response.status_code == 400
    assert 'is_raw_material' in response.get_json()['error']

    assert add_product(client, 'RM001', 10, is_raw_material=True).status_code == 201
    response = client.put('/api/inventory/RM001', json={'is_raw_material': 1})
    assert response.status_code == 400
    assert client.get('/api/inventory/RM001').get_json()['is_raw_material'] is True

    response = client.post('/api/inventory/update', json={
        'product_code': 'NEW', 'qtyDelta': 5, 'create_if_missing': True, 'price': 'abc',
    })
    assert response.status_code == 400
    response = client.post('/api/inventory/update', json={
        'product_code': 'NEW', 'qtyDelta': 5, 'create_if_missing': True, 'weight': -3,
    })
    assert response.status_code == 400
    assert client.get('/api/inventory/NEW').status_code == 404

    response = client.post('/api/inventory/update', json={
        'product_code': 'NEW', 'qtyDelta': 5, 'create_if_missing': True,
        'name': 'Gasket', 'price': 1.5, 'weight': 0.2,
    })
    assert response.status_code == 200
    assert response.get_json()['name'] == 'Gasket'
    assert response.get_json()['weight'] == 0.2


def test_search_report_and_movements(client):
    add_product(client, 'RM001', 10)
    add_product(client, 'FG001', 4)
    client.post('/api/inventory/update', json={'product_code': 'FG001', 'qtyDelta': 1})

    response = client.get('/api/inventory/search?query=FG')
    assert [p['product_code'] for p in response.get_json()] == ['FG001']
    assert client.get('/api/inventory/search').status_code == 400

    report = client.get('/api/inventory/report').get_json()
    assert report['summary'] == {'total_products': 2, 'total_inventory_value': 30.0}
    assert {row['product_code']: row['total_value'] for row in report['products']} == {
        'FG001': 10.0, 'RM001': 20.0,
    }

    movements = client.get('/api/inventory/movements?product_code=FG001').get_json()
    assert [m['movement_type'] for m in movements] == ['Adjustment', 'Initial']
    assert movements[0]['product_name'] == 'Product FG001'

    initial = client.get('/api/inventory/movements?movement_type=Initial').get_json()
    assert sorted(m['product_code'] for m in initial) == ['FG001', 'RM001']

    latest = client.get('/api/inventory/movements?limit=1').get_json()
    assert len(latest) == 1
    assert latest[0]['movement_type'] == 'Adjustment'

    assert client.get('/api/inventory/movements?limit=abc').status_code == 400
    assert client.get('/api/inventory/movements?limit=0').status_code == 400


def test_wip_status_mapping(client):
    add_product(client, 'RM001', 10)
    batch = {
        'batch_number': 'B1',
        'raw_materials': [{'product_code': 'RM001', 'quantity': 4}],
        'output': [{'product_code': 'FG001', 'quantity': 2}],
        'status': 'in_progress',
        'start_date': '2024-05-01T09:00:00Z',
    }
    response = client.post('/api/wip', json=batch)
    assert response.status_code == 201
    assert response.get_json()['batch']['raw_materials_count'] == 1

    assert client.post('/api/wip', json=batch).status_code == 409

    short = dict(batch, batch_number='B2', raw_materials=[{'product_code': 'RM001', 'quantity': 50}])
    response = client.post('/api/wip', json=short)
    assert response.status_code == 400
    assert response.get_json()['available'] == 6

    missing = dict(batch, batch_number='B3', raw_materials=[{'product_code': 'RM404', 'quantity': 1}])
    assert client.post('/api/wip', json=missing).status_code == 400

    assert client.put('/api/wip/NOPE', json={'output': [{'product_code': 'FG001', 'quantity': 1}]}).status_code == 404
    assert client.put('/api/wip/B1', json={'output': []}).status_code == 400

    response = client.put('/api/wip/B1', json={'status': 'completed',
                                               'output': [{'product_code': 'FG001', 'quantity': 2}]})
    assert response.status_code == 200
    assert response.get_json()['batch']['status'] == 'completed'
    assert client.get('/api/inventory/FG001').get_json()['quantity'] == 2

    assert [b['batch_number'] for b in client.get('/api/wip').get_json()] == ['B1']


def test_order_routes(client):
    add_product(client, 'FG001', 5)
    order = {'order_id': 'SO-1', 'party_id': 'P1', 'type': 'sales',
             'products': [{'product_code': 'FG001', 'quantity': 2, 'price': 10}]}
    response = client.post('/api/quotations/create', json=order)
    assert response.status_code == 201
    assert response.get_json()['party_name'] == 'P1'
    assert client.post('/api/quotations/create', json=order).status_code == 409

    assert len(client.get('/api/quotations').get_json()) == 1

    response = client.post('/api/quotations/update-status', json={'order_id': 'SO-1', 'status': 'dispatched'})
    assert response.status_code == 400

    response = client.post('/api/quotations/update-status', json={'order_id': 'SO-1', 'status': 'packing'})
    assert response.get_json()['status'] == 'packing'
    assert [o['order_id'] for o in client.get('/api/current-orders').get_json()] == ['SO-1']

    client.post('/api/quotations/update-status', json={'order_id': 'SO-1', 'status': 'dispatched'})
    assert [o['order_id'] for o in client.get('/api/order-history').get_json()] == ['SO-1']

    response = client.post('/api/quotations/update-status', json={'order_id': 'NOPE', 'status': 'packing'})
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Order not found'}

    response = client.post('/api/quotations/create', json=dict(order, order_id='X', type='lease'))
    assert response.status_code == 400


def test_order_deletion_routes(client):
    for order_id in ('Q1', 'Q2'):
        client.post('/api/quotations/create', json={
            'order_id': order_id, 'party_id': 'S1', 'type': 'purchase',
            'products': [{'product_code': 'RM001', 'quantity_ordered': 5}],
        })
    assert client.delete('/api/quotations/Q1').status_code == 200
    assert client.delete('/api/quotations/Q1').status_code == 404
    response = client.delete('/api/quotations/cleanup/all')
    assert response.get_json()['count'] == 1


def test_party_routes(client):
    response = client.post('/api/customers', json={'name': 'Northwind', 'phone': '555'})
    assert response.status_code == 201
    customer_id = response.get_json()['id']
    assert customer_id == 'CUST-0001'

    assert client.get(f'/api/customers/{customer_id}').get_json()['name'] == 'Northwind'
    assert client.get('/api/customers/NOPE').status_code == 404
    assert client.post('/api/customers', json={'phone': '1'}).status_code == 400

    response = client.post('/api/customers/delete', json={'id': customer_id})
    assert response.status_code == 200
    assert response.get_json()['deleted']['id'] == customer_id
    assert client.post('/api/customers/delete', json={'id': customer_id}).status_code == 404

    assert client.post('/api/suppliers', json={'name': 'Metals Direct'}).get_json()['id'] == 'SUP-0001'
    assert len(client.get('/api/suppliers').get_json()) == 1


def test_api_key_required_when_configured(keyed_client):
    assert keyed_client.get('/api/inventory').status_code == 401
    assert keyed_client.get('/api/inventory').get_json() == {'error': 'Unauthorized'}
    assert keyed_client.get('/api/inventory', headers={'X-API-Key': 'wrong'}).status_code == 401
    assert keyed_client.get('/api/inventory', headers={'X-API-Key': 's3cret'}).status_code == 200
