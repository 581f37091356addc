from __future__ import annotations


class OrderStatus:
    """
    Order status codes and the allowed moves per order type.

    Sales: quotation -> packing -> dispatched.
    Purchase: quotation -> completed, possibly after several partial receipts
    that leave the status at quotation.
    """

    QUOTATION = "quotation"
    PACKING = "packing"
    DISPATCHED = "dispatched"
    COMPLETED = "completed"

    TYPES = {"sales", "purchase"}

    _NEXT = {
        ("sales", QUOTATION): {PACKING},
        ("sales", PACKING): {DISPATCHED},
        ("sales", DISPATCHED): set(),
        ("purchase", QUOTATION): {COMPLETED},
        ("purchase", COMPLETED): set(),
    }

    # statuses shown in the order history view
    CLOSED = (COMPLETED, DISPATCHED)

    @classmethod
    def can_transition(cls, order_type: str, current_status: str, new_status: str) -> bool:
        return new_status in cls._NEXT.get((order_type, current_status), set())
