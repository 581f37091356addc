from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase


class WipBatchItem(TimestampedBase):
    """One raw material consumed by, or one output produced by, a WIP batch"""
    __tablename__ = 'wip_batch_items'

    RAW_MATERIAL = 'raw_material'
    OUTPUT = 'output'

    id = db.Column(db.Integer, primary_key=True)
    batch_number = db.Column(db.String(100), db.ForeignKey('wip_batches.batch_number'), nullable=False)
    role = db.Column(db.String(20), nullable=False)
    line_number = db.Column(db.Integer, nullable=False)

    product_code = db.Column(db.String(100), nullable=False)
    quantity = db.Column(db.Float, nullable=False)

    batch = db.relationship('WipBatch', back_populates='items')

    def __repr__(self):
        return f'<WipBatchItem {self.batch_number} {self.role}: {self.product_code} x{self.quantity}>'

    def to_line_item(self) -> dict:
        return {'product_code': self.product_code, 'quantity': self.quantity}
