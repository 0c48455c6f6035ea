from sqlalchemy.orm import validates
from itassets.data.core.record_base import RecordBase
from itassets import db

INVOICE_STATUSES = ('pending', 'paid')


def normalize_invoice_number(value) -> str:
    """Uppercase and drop everything but letters and digits ("fe-1020 " -> "FE1020")"""
    text = str(value or '').strip().upper()
    return ''.join(ch for ch in text if ch.isascii() and ch.isalnum())


class Invoice(RecordBase):
    __tablename__ = 'invoices'
    __table_args__ = (
        db.UniqueConstraint('supplier_id', 'number_normalized', name='uq_invoice_supplier_number'),
    )

    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=False, index=True)
    site_id = db.Column(db.Integer, db.ForeignKey('sites.id'), nullable=False)
    number = db.Column(db.String(60), nullable=False)
    number_normalized = db.Column(db.String(60), nullable=False)
    description = db.Column(db.Text, nullable=False)
    date = db.Column(db.Date, nullable=True)
    due_date = db.Column(db.Date, nullable=True)
    total = db.Column(db.Numeric(14, 2), nullable=False)
    status = db.Column(db.String(10), nullable=False, default='pending')

    protected_fields = frozenset({'id', 'created_at', 'updated_at', 'number_normalized'})

    supplier = db.relationship('Supplier', back_populates='invoices')
    site = db.relationship('Site')

    @validates('number')
    def _track_normalized_number(self, key, value):
        self.number_normalized = normalize_invoice_number(value)
        return value

    def __repr__(self):
        return f'<Invoice {self.number} (supplier {self.supplier_id})>'
