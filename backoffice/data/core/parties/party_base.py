from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase


class PartyBase(TimestampedBase):
    """Shared columns for customers and suppliers

    `id` is either supplied by the caller (often the display name) or
    generated from the matching sequence.
    """

    __abstract__ = True

    id = db.Column(db.String(100), primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    address = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.id}: {self.name}>'
