from sqlalchemy import inspect
from sqlalchemy.orm import validates
from itassets.data.core.record_base import RecordBase
from itassets.buisness.core.errors import PrefixLockedError
from itassets import db


class Site(RecordBase):
    __tablename__ = 'sites'

    name = db.Column(db.String(150), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    prefix = db.Column(db.String(4), nullable=False, unique=True, index=True)
    # Only ever written by SiteAssetSequence
    asset_seq = db.Column(db.Integer, nullable=False, default=0, server_default='0')
    company_id = db.Column(db.String(64), nullable=True)

    protected_fields = frozenset({'id', 'created_at', 'updated_at', 'prefix', 'asset_seq'})

    # Not persisted: adjustment note from prefix allocation at creation time
    prefix_note = ''

    assets = db.relationship('Asset', back_populates='site', foreign_keys='Asset.site_id')

    @validates('prefix')
    def _lock_prefix(self, key, value):
        """The prefix is assigned once at creation and never changes afterwards"""
        state = inspect(self)
        if state.persistent and self.prefix is not None and value != self.prefix:
            raise PrefixLockedError(
                f"Site {self.id} prefix is locked at '{self.prefix}' and cannot change to '{value}'"
            )
        return value

    def __repr__(self):
        return f'<Site {self.name} ({self.prefix})>'
