"""
Party directories - customers and suppliers

Both directories share one implementation; the subclass picks the repository
and the id sequence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.buisness.core.errors import ConflictError, NotFoundError
from backoffice.buisness.core.validation import optional_text, require_text
from backoffice.data.core.parties.customer import Customer
from backoffice.data.core.parties.supplier import Supplier
from backoffice.data.core.sequences import CustomerIDManager, SupplierIDManager
from backoffice.data.core.store import Store
from backoffice.logger import get_logger

logger = get_logger("backoffice.buisness.parties.party_directory")


class PartyDirectory(ABC):
    model = None
    id_manager = None
    label = "Party"

    def __init__(self, store: Store | None = None):
        self.store = store or Store()

    @property
    @abstractmethod
    def repository(self):
        """Repository holding this directory's records"""
        pass

    def list(self):
        return self.repository.list(order_by=[self.model.created_at.desc(), self.model.id])

    def get_by_id(self, party_id):
        party = self.repository.find_by_key(party_id)
        if party is None:
            raise NotFoundError(f"{self.label} '{party_id}' not found")
        return party

    def find(self, party_id):
        return self.repository.find_by_key(party_id)

    def _next_free_id(self):
        # ids can also be supplied by callers, so skip any the counter collides with
        while True:
            candidate = self.id_manager.get_next_party_id(self.store.session)
            if not self.repository.exists(candidate):
                return candidate

    def create(self, data: dict):
        """
        Create a record. `id` is generated from the sequence when not supplied.

        Raises:
            ValidationError: missing name or malformed fields
            ConflictError: supplied id already in use
        """
        name = require_text(data.get("name"), "name")
        fields = {
            "name": name,
            "email": optional_text(data.get("email"), "email"),
            "phone": optional_text(data.get("phone"), "phone"),
            "address": optional_text(data.get("address"), "address"),
        }

        with self.store.transaction():
            party_id = data.get("id")
            if party_id is not None and party_id != "":
                party_id = require_text(party_id, "id")
                if self.repository.exists(party_id):
                    logger.warning(f"Rejected duplicate {self.label.lower()} id {party_id}")
                    raise ConflictError(f"{self.label} '{party_id}' already exists")
            else:
                party_id = self._next_free_id()

            party = self.model.from_dict(dict(fields, id=party_id))
            self.repository.create(party)

        logger.info(f"Created {self.label.lower()} {party_id}")
        return party

    def ensure(self, party_id: str):
        """Return the record for `party_id`, creating a bare one (name = id) if unknown."""
        with self.store.transaction():
            party = self.repository.find_by_key(party_id)
            if party is None:
                party = self.repository.create(self.model(id=party_id, name=party_id))
                logger.info(f"Auto-created {self.label.lower()} {party_id}")
        return party

    def delete(self, party_id):
        with self.store.transaction():
            party = self.get_by_id(party_id)
            payload = party.to_dict()
            self.repository.delete(party)
        logger.info(f"Deleted {self.label.lower()} {party_id}")
        return payload


class CustomerDirectory(PartyDirectory):
    model = Customer
    id_manager = CustomerIDManager
    label = "Customer"

    @property
    def repository(self):
        return self.store.customers


class SupplierDirectory(PartyDirectory):
    model = Supplier
    id_manager = SupplierIDManager
    label = "Supplier"

    @property
    def repository(self):
        return self.store.suppliers
