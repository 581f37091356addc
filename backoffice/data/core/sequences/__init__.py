"""
Sequence ID Managers
Manages counter tables for generated identifiers
"""

from backoffice.data.core.sequences.party_id_managers import CustomerIDManager, SupplierIDManager

__all__ = [
    'CustomerIDManager',
    'SupplierIDManager',
]
