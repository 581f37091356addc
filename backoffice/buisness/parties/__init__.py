"""Customer and supplier directories"""

from backoffice.buisness.parties.party_directory import CustomerDirectory, SupplierDirectory

__all__ = [
    'CustomerDirectory',
    'SupplierDirectory'
]
