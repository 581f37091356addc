from backoffice.data.core.parties.party_base import PartyBase


class Customer(PartyBase):
    __tablename__ = 'customers'
