from datetime import datetime, timezone
from backoffice import db
from backoffice.buisness.core.data_insertion_mixin import DataInsertionMixin


def utc_now():
    """Naive UTC timestamp (the columns below are timezone-less)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampedBase(db.Model, DataInsertionMixin):
    """Abstract base class for all persisted entities with audit timestamps

    Each subclass declares its own natural primary key (product_code, order_id,
    batch_number, ...).
    """

    __abstract__ = True

    created_at = db.Column(db.DateTime, default=utc_now)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now)
