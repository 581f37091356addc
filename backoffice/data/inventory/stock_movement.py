from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase, utc_now


class StockMovement(TimestampedBase):
    """Trace of every quantity change applied to a product

    product_code is not a foreign key: movements outlive deleted products.
    """
    __tablename__ = 'stock_movements'

    INITIAL = 'Initial'
    ADJUSTMENT = 'Adjustment'
    WIP_INPUT = 'WipInput'
    WIP_OUTPUT = 'WipOutput'
    RECEIPT = 'Receipt'
    DISPATCH = 'Dispatch'

    id = db.Column(db.Integer, primary_key=True)
    product_code = db.Column(db.String(100), nullable=False, index=True)

    # Movement Details
    movement_type = db.Column(db.String(20), nullable=False)
    quantity_delta = db.Column(db.Float, nullable=False)
    quantity_after = db.Column(db.Float, nullable=False)
    movement_date = db.Column(db.DateTime, nullable=False, default=utc_now)

    # Reference Fields (order_id / batch_number)
    reference_type = db.Column(db.String(50), nullable=True)
    reference_id = db.Column(db.String(100), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<StockMovement {self.movement_type}: {self.product_code} {self.quantity_delta:+}>'
