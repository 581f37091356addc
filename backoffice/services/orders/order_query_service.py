"""
Order Query Service
Read paths for quotations, current orders and order history.

Every order returned here carries party_name, party_phone and party_address,
resolved from the customer/supplier directories at read time.
"""

from typing import Any, Dict, List, Optional

from backoffice.buisness.core.errors import NotFoundError
from backoffice.buisness.orders.order_status import OrderStatus
from backoffice.data.core.store import Store
from backoffice.data.orders.order_header import OrderHeader

UNKNOWN_PARTY = {
    'party_name': 'Unknown',
    'party_phone': '',
    'party_address': '',
}


class OrderQueryService:
    """Service for order presentation data"""

    @staticmethod
    def _find_party(order: OrderHeader, store: Store):
        # type-matching directory first, then the other one
        if order.is_purchase:
            lookups = (store.suppliers, store.customers)
        else:
            lookups = (store.customers, store.suppliers)
        for repository in lookups:
            party = repository.find_by_key(order.party_id)
            if party is not None:
                return party
        return None

    @staticmethod
    def enrich(order: OrderHeader, store: Optional[Store] = None) -> Dict[str, Any]:
        store = store or Store()
        result = order.to_dict()
        party = OrderQueryService._find_party(order, store)
        if party is None:
            result.update(UNKNOWN_PARTY)
        else:
            result['party_name'] = party.name or UNKNOWN_PARTY['party_name']
            result['party_phone'] = party.phone or ''
            result['party_address'] = party.address or ''
        return result

    @staticmethod
    def _list(store: Optional[Store], *criteria, **filters) -> List[Dict[str, Any]]:
        store = store or Store()
        orders = store.orders.list(
            *criteria,
            order_by=[OrderHeader.date.desc(), OrderHeader.order_id],
            **filters
        )
        return [OrderQueryService.enrich(order, store) for order in orders]

    @staticmethod
    def list_quotations(store: Optional[Store] = None) -> List[Dict[str, Any]]:
        """Orders of either type still in status 'quotation'."""
        return OrderQueryService._list(store, status=OrderStatus.QUOTATION)

    @staticmethod
    def list_current_orders(store: Optional[Store] = None) -> List[Dict[str, Any]]:
        """Sales orders being packed."""
        return OrderQueryService._list(store, type=OrderHeader.SALES, status=OrderStatus.PACKING)

    @staticmethod
    def list_order_history(store: Optional[Store] = None) -> List[Dict[str, Any]]:
        """Completed purchases and dispatched sales."""
        return OrderQueryService._list(store, OrderHeader.status.in_(OrderStatus.CLOSED))

    @staticmethod
    def get_order(order_id: str, store: Optional[Store] = None) -> Dict[str, Any]:
        store = store or Store()
        order = store.orders.find_by_key(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return OrderQueryService.enrich(order, store)
