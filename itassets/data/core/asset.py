from itassets.data.core.record_base import RecordBase
from itassets import db

ASSET_TYPES = (
    'laptop', 'desktop', 'monitor', 'keyboard', 'mouse',
    'printer', 'scanner', 'network', 'other',
)
ASSET_STATUSES = ('storage', 'assigned', 'maintenance', 'retired')

COMPUTER_TYPES = ('laptop', 'desktop')
COMPUTER_FIELDS = ('processor', 'ram', 'storage', 'os')
MONITOR_FIELDS = ('monitor_brand', 'monitor_size', 'monitor_serial')
ASSIGNMENT_FIELDS = ('assigned_to_name', 'assigned_to_position', 'assigned_at')

# Codes kept in previous_fixed_asset_ids
CODE_HISTORY_LIMIT = 10


class Asset(RecordBase):
    __tablename__ = 'assets'

    fixed_asset_id = db.Column(db.String(32), nullable=False, unique=True, index=True)
    site_id = db.Column(db.Integer, db.ForeignKey('sites.id'), nullable=False, index=True)

    asset_type = db.Column(db.String(20), nullable=False, default='other')
    brand = db.Column(db.String(100), nullable=False)
    model = db.Column(db.String(100), nullable=True)
    serial = db.Column(db.String(100), nullable=False)
    internal_plate = db.Column(db.String(50), nullable=True)
    status = db.Column(db.String(20), nullable=False, default='storage')

    purchase_date = db.Column(db.Date, nullable=True)
    cost = db.Column(db.Numeric(14, 2), nullable=True)

    processor = db.Column(db.String(100), nullable=True)
    ram = db.Column(db.String(50), nullable=True)
    storage = db.Column(db.String(50), nullable=True)
    os = db.Column(db.String(100), nullable=True)

    # Desktop only
    monitor_brand = db.Column(db.String(100), nullable=True)
    monitor_size = db.Column(db.String(30), nullable=True)
    monitor_serial = db.Column(db.String(100), nullable=True)

    notes = db.Column(db.Text, nullable=True)

    # Current custodian, set only while status is 'assigned'
    assigned_to_name = db.Column(db.String(150), nullable=True, index=True)
    assigned_to_position = db.Column(db.String(100), nullable=True)
    assigned_at = db.Column(db.DateTime, nullable=True)

    # Oldest first, most recent last
    previous_fixed_asset_ids = db.Column(db.JSON, nullable=False, default=list)
    moved_at = db.Column(db.DateTime, nullable=True)
    moved_from_site_id = db.Column(db.Integer, db.ForeignKey('sites.id'), nullable=True)

    version = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    protected_fields = frozenset({
        'id', 'created_at', 'updated_at', 'version',
        'fixed_asset_id', 'site_id', 'previous_fixed_asset_ids',
        'moved_at', 'moved_from_site_id', 'assigned_at',
    })

    site = db.relationship('Site', back_populates='assets', foreign_keys=[site_id])
    moved_from_site = db.relationship('Site', foreign_keys=[moved_from_site_id])

    def __repr__(self):
        return f'<Asset {self.fixed_asset_id} ({self.brand} {self.serial})>'
