from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase


class OrderLine(TimestampedBase):
    """Individual line items within an order

    Sales lines use `quantity`; purchase lines use `quantity_ordered` and
    `quantity_received`. product_code may name a product the catalog does not
    know yet (purchases create it on receipt).
    """
    __tablename__ = 'order_lines'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.String(100), db.ForeignKey('orders.order_id'), nullable=False)
    line_number = db.Column(db.Integer, nullable=False)

    product_code = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Float, nullable=False, default=0.0)

    # Sales
    quantity = db.Column(db.Float, nullable=True)

    # Purchase
    quantity_ordered = db.Column(db.Float, nullable=True)
    quantity_received = db.Column(db.Float, nullable=True)

    # Descriptive fields carried on the document, used when a receipt creates the product
    name = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=True)
    weight = db.Column(db.Float, nullable=True)

    order = db.relationship('OrderHeader', back_populates='lines')

    __table_args__ = (
        db.UniqueConstraint('order_id', 'line_number', name='uq_order_line_number'),
    )

    def __repr__(self):
        return f'<OrderLine {self.order_id}#{self.line_number}: {self.product_code}>'

    @property
    def is_fully_received(self) -> bool:
        return (self.quantity_received or 0.0) == (self.quantity_ordered or 0.0)

    def to_line_item(self) -> dict:
        """Line item shape returned to callers (sales or purchase flavour)."""
        item = {
            'product_code': self.product_code,
            'price': self.price,
        }
        if self.order is not None and self.order.is_purchase:
            item['quantity_ordered'] = self.quantity_ordered
            item['quantity_received'] = self.quantity_received
        else:
            item['quantity'] = self.quantity
        for key in ('name', 'description', 'weight'):
            value = getattr(self, key)
            if value is not None:
                item[key] = value
        return item
