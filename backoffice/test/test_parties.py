"""
Customer and supplier directory tests, plus party enrichment on order reads
"""
from datetime import datetime

import pytest

from backoffice.buisness.core.errors import ConflictError, NotFoundError, ValidationError
from backoffice.buisness.orders import OrderManager
from backoffice.buisness.parties import CustomerDirectory, SupplierDirectory
from backoffice.buisness.parties.party_directory import PartyDirectory
from backoffice.services.orders import OrderQueryService


@pytest.fixture
def customers(store):
    return CustomerDirectory(store)


@pytest.fixture
def suppliers(store):
    return SupplierDirectory(store)


def test_base_directory_is_abstract(store):
    with pytest.raises(TypeError):
        PartyDirectory(store)


def test_generated_ids_per_directory(customers, suppliers):
    first = customers.create({'name': 'Northwind'})
    second = customers.create({'name': 'Contoso', 'phone': '555-0101'})
    supplier = suppliers.create({'name': 'Metals Direct'})
    assert (first.id, second.id) == ('CUST-0001', 'CUST-0002')
    assert supplier.id == 'SUP-0001'
    assert first.created_at is not None


def test_generated_id_skips_taken_ids(customers):
    customers.create({'id': 'CUST-0001', 'name': 'Manual'})
    assert customers.create({'name': 'Generated'}).id == 'CUST-0002'


def test_supplied_id_and_validation(customers):
    party = customers.create({'id': 'ACME', 'name': 'Acme Ltd', 'email': 'a@acme.example'})
    assert customers.get_by_id('ACME').email == 'a@acme.example'
    with pytest.raises(ConflictError):
        customers.create({'id': 'ACME', 'name': 'Acme again'})
    with pytest.raises(ValidationError):
        customers.create({'email': 'nameless@example.com'})
    assert party.to_dict()['name'] == 'Acme Ltd'


def test_list_newest_first(customers, store):
    older = customers.create({'name': 'Old'})
    newer = customers.create({'name': 'New'})
    older.created_at = datetime(2023, 1, 1)
    newer.created_at = datetime(2024, 1, 1)
    store.session.commit()
    assert [c.name for c in customers.list()] == ['New', 'Old']


def test_delete(customers):
    customers.create({'id': 'C1', 'name': 'Gone Soon'})
    deleted = customers.delete('C1')
    assert deleted['name'] == 'Gone Soon'
    with pytest.raises(NotFoundError):
        customers.get_by_id('C1')
    with pytest.raises(NotFoundError):
        customers.delete('C1')


def test_enrichment_uses_directory_record(customers, store, stocked):
    customers.create({'id': 'C9', 'name': 'Northwind', 'phone': '555-0100', 'address': '12 Harbour Road'})
    OrderManager(store).create_order({
        'order_id': 'SO-1', 'party_id': 'C9', 'type': 'sales',
        'products': [{'product_code': 'FG001', 'quantity': 1}],
    })
    enriched = OrderQueryService.get_order('SO-1', store)
    assert enriched['party_name'] == 'Northwind'
    assert enriched['party_phone'] == '555-0100'
    assert enriched['party_address'] == '12 Harbour Road'


def test_enrichment_defaults_for_missing_party(customers, store, stocked):
    OrderManager(store).create_order({
        'order_id': 'SO-1', 'party_id': 'C9', 'type': 'sales',
        'products': [{'product_code': 'FG001', 'quantity': 1}],
    })
    customers.delete('C9')
    enriched = OrderQueryService.list_quotations(store)[0]
    assert enriched['party_name'] == 'Unknown'
    assert enriched['party_phone'] == ''
    assert enriched['party_address'] == ''


def test_order_views(store, stocked):
    manager = OrderManager(store)
    for order_id in ('SO-1', 'SO-2', 'SO-3'):
        manager.create_order({'order_id': order_id, 'party_id': 'P1', 'type': 'sales',
                              'products': [{'product_code': 'FG001', 'quantity': 1}]})
    manager.create_order({'order_id': 'PO-1', 'party_id': 'S1', 'type': 'purchase',
                          'products': [{'product_code': 'RM001', 'quantity_ordered': 1}]})
    manager.transition('SO-2', 'packing')
    manager.transition('SO-3', 'packing')
    manager.transition('SO-3', 'dispatched')
    manager.transition('PO-1', 'completed')

    assert {o['order_id'] for o in OrderQueryService.list_quotations(store)} == {'SO-1'}
    assert [o['order_id'] for o in OrderQueryService.list_current_orders(store)] == ['SO-2']
    assert {o['order_id'] for o in OrderQueryService.list_order_history(store)} == {'SO-3', 'PO-1'}
    with pytest.raises(NotFoundError):
        OrderQueryService.get_order('NOPE', store)
