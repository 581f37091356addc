from backoffice.data.core.parties.customer import Customer
from backoffice.data.core.parties.supplier import Supplier

__all__ = [
    'Customer',
    'Supplier'
]
