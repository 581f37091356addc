"""Order managers - quotations, sales and purchase orders"""

from backoffice.buisness.orders.order_manager import OrderManager, TransitionResult
from backoffice.buisness.orders.order_status import OrderStatus

__all__ = [
    'OrderManager',
    'TransitionResult',
    'OrderStatus'
]
