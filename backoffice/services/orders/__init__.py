"""
Order Services
Order listings enriched with party display fields.
"""

from .order_query_service import OrderQueryService

__all__ = [
    'OrderQueryService',
]
