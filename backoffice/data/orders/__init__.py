"""Order models - CRUD only, no business logic"""

from backoffice.data.orders.order_header import OrderHeader
from backoffice.data.orders.order_line import OrderLine

__all__ = [
    'OrderHeader',
    'OrderLine'
]
