from backoffice import db
from backoffice.data.core.timestamped_base import TimestampedBase


class WipBatch(TimestampedBase):
    """
    Work-in-progress production batch.

    Raw materials are deducted when the batch is created; outputs are credited
    when it is completed. The output list recorded at completion replaces the
    expected one.
    """
    __tablename__ = 'wip_batches'

    batch_number = db.Column(db.String(100), primary_key=True)
    status = db.Column(db.String(20), nullable=False, default='in_progress')  # planned/in_progress/on_hold/completed (conventions)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    items = db.relationship(
        'WipBatchItem',
        back_populates='batch',
        order_by='WipBatchItem.line_number',
        cascade='all, delete-orphan',
    )

    def __repr__(self):
        return f'<WipBatch {self.batch_number}: {self.status}>'

    @property
    def raw_materials(self):
        return [item for item in self.items if item.role == 'raw_material']

    @property
    def output(self):
        return [item for item in self.items if item.role == 'output']

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields=include_audit_fields)
        result['raw_materials'] = [item.to_line_item() for item in self.raw_materials]
        result['output'] = [item.to_line_item() for item in self.output]
        return result

    def summary(self) -> dict:
        """Confirmation payload returned after create/complete."""
        result = self.to_dict(include_audit_fields=False)
        result['raw_materials_count'] = len(result['raw_materials'])
        result['output_count'] = len(result['output'])
        return result
