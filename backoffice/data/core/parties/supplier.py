from backoffice.data.core.parties.party_base import PartyBase


class Supplier(PartyBase):
    __tablename__ = 'suppliers'
