from itassets.data.core.record_base import RecordBase
from itassets import db


class Supplier(RecordBase):
    __tablename__ = 'suppliers'

    name = db.Column(db.String(150), nullable=False)
    nit = db.Column(db.String(30), nullable=False, unique=True)
    contact_name = db.Column(db.String(100), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    category = db.Column(db.String(60), nullable=True)

    invoices = db.relationship('Invoice', back_populates='supplier')

    def __repr__(self):
        return f'<Supplier {self.name} ({self.nit})>'
