"""
Party ID Managers
Mint readable ids (CUST-0001, SUP-0001) for customers and suppliers created
without a caller-supplied id
"""

from backoffice.data.core.virtual_sequence_generator import VirtualSequenceGenerator


class PartyIDManager(VirtualSequenceGenerator):
    """Formats the next counter value with a fixed prefix"""

    prefix = None
    width = 4

    @classmethod
    def get_next_party_id(cls, session):
        return f"{cls.prefix}-{cls.get_next_id(session):0{cls.width}d}"


class CustomerIDManager(PartyIDManager):
    prefix = "CUST"

    @classmethod
    def get_sequence_table_name(cls):
        return "_sequence_customer_id"


class SupplierIDManager(PartyIDManager):
    prefix = "SUP"

    @classmethod
    def get_sequence_table_name(cls):
        return "_sequence_supplier_id"
