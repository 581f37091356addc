from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase, utc_now


class OrderHeader(TimestampedBase):
    """
    Commercial document: quotation, sales order or purchase order.

    One table for all three; `type` and `status` tell them apart.
    Data model only: status transitions and stock effects belong in
    `backoffice/buisness/orders/`.
    """
    __tablename__ = 'orders'

    SALES = 'sales'
    PURCHASE = 'purchase'

    order_id = db.Column(db.String(100), primary_key=True)
    type = db.Column(db.String(20), nullable=False)
    party_id = db.Column(db.String(100), nullable=False, index=True)  # weak reference, not owned

    status = db.Column(db.String(20), nullable=False, default='quotation', index=True)
    date = db.Column(db.DateTime, nullable=False, default=utc_now)

    notes = db.Column(db.Text, nullable=True)
    bom = db.Column(db.JSON, nullable=True)  # passthrough

    lines = db.relationship(
        'OrderLine',
        back_populates='order',
        order_by='OrderLine.line_number',
        cascade='all, delete-orphan',
    )

    def __repr__(self):
        return f'<OrderHeader {self.order_id}: {self.type} {self.status}>'

    @property
    def is_purchase(self) -> bool:
        return self.type == self.PURCHASE

    @property
    def is_sales(self) -> bool:
        return self.type == self.SALES

    @property
    def all_received(self) -> bool:
        return all(line.is_fully_received for line in self.lines)

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields=include_audit_fields)
        result['products'] = [line.to_line_item() for line in self.lines]
        return result
