"""
Asset Factory
Registers assets, edits their descriptive fields and tracks their custodian.

Registration allocates the fixed asset code first (committed on its own) and
then persists the asset carrying it. A failed insert leaves a gap in the
site's sequence; it never produces a duplicate code.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
from itassets import db
from itassets.data.core.asset import (
    Asset,
    ASSET_STATUSES,
    ASSET_TYPES,
    ASSIGNMENT_FIELDS,
    COMPUTER_FIELDS,
    COMPUTER_TYPES,
    MONITOR_FIELDS,
)
from itassets.data.core.record_base import utc_now
from itassets.data.core.site import Site
from itassets.buisness.core.errors import NotFound
from itassets.buisness.assets.fixed_asset_code_allocator import allocate_fixed_asset_code
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.assets")

# Fields that only allocation and relocation may write
ALLOCATION_FIELDS = frozenset({
    'fixed_asset_id', 'site_id', 'previous_fixed_asset_ids', 'moved_at', 'moved_from_site_id',
})

ASSIGNMENT_REQUIRED = "For status assigned, enter the custodian's full name and position"


class AssetFactory:
    """Asset registration, descriptive edits, assignment and return"""

    @staticmethod
    def _validate(fields: Dict[str, Any]) -> None:
        if 'asset_type' in fields and fields['asset_type'] not in ASSET_TYPES:
            raise ValueError(f"Unknown asset type '{fields['asset_type']}'")
        if 'status' in fields and fields['status'] not in ASSET_STATUSES:
            raise ValueError(f"Unknown asset status '{fields['status']}'")
        for field in ('brand', 'serial'):
            if field in fields and not str(fields[field] or '').strip():
                raise ValueError(f"Asset {field} is required")
        if isinstance(fields.get('purchase_date'), str):
            fields['purchase_date'] = date.fromisoformat(fields['purchase_date'])
        if fields.get('cost') is not None:
            try:
                fields['cost'] = Decimal(str(fields['cost']))
            except InvalidOperation:
                raise ValueError(f"Invalid asset cost '{fields['cost']}'")

    @staticmethod
    def _check_assignment(status: str, name: Optional[str], position: Optional[str]) -> None:
        if status != 'assigned':
            return
        if not str(name or '').strip() or not str(position or '').strip():
            raise ValueError(ASSIGNMENT_REQUIRED)

    @staticmethod
    def _apply_rules(asset: Asset) -> None:
        """
        Keep type-specific hardware fields and the custodian consistent.

        Monitor fields only apply to desktops and computer specs to laptops
        and desktops. An assigned asset keeps its first assigned_at across
        later saves; any other status clears the custodian.
        """
        if asset.asset_type != 'desktop':
            for field in MONITOR_FIELDS:
                setattr(asset, field, None)
        if asset.asset_type not in COMPUTER_TYPES:
            for field in COMPUTER_FIELDS:
                setattr(asset, field, None)

        if asset.status != 'assigned':
            for field in ASSIGNMENT_FIELDS:
                setattr(asset, field, None)
            return
        asset.assigned_to_name = asset.assigned_to_name.strip()
        asset.assigned_to_position = asset.assigned_to_position.strip()
        if asset.assigned_at is None:
            asset.assigned_at = utc_now()

    @staticmethod
    def _get(asset_id: int) -> Asset:
        asset = db.session.get(Asset, asset_id)
        if asset is None:
            raise NotFound("Asset", asset_id)
        return asset

    @classmethod
    def create_asset(cls, site_id: int, **fields) -> Asset:
        """
        Register an asset at ``site_id`` with a freshly allocated code.

        Raises:
            ValueError: If required fields are missing or invalid
            NotFound: If the site does not exist
        """
        for field in ('brand', 'serial'):
            fields.setdefault(field, None)
        fields.setdefault('asset_type', 'other')
        fields.setdefault('status', 'storage')
        cls._validate(fields)
        cls._check_assignment(
            fields['status'], fields.get('assigned_to_name'), fields.get('assigned_to_position')
        )

        if db.session.get(Site, site_id) is None:
            raise NotFound("Site", site_id)

        fixed_asset_id = allocate_fixed_asset_code(site_id)

        asset = Asset.from_dict(fields)
        asset.site_id = site_id
        asset.fixed_asset_id = fixed_asset_id
        asset.previous_fixed_asset_ids = []
        cls._apply_rules(asset)
        db.session.add(asset)

        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.error(f"Asset insert failed after allocating {fixed_asset_id}; the code stays unused")
            raise

        logger.info(f"Asset created: {asset.fixed_asset_id} (ID: {asset.id})")
        return asset

    @classmethod
    def update_asset(cls, asset_id: int, **updates) -> Asset:
        """
        Update descriptive fields. Codes and site change only through relocation.

        Raises:
            NotFound: If the asset does not exist
            ValueError: If allocation fields or invalid values are supplied
        """
        blocked = set(updates) & ALLOCATION_FIELDS
        if blocked:
            raise ValueError(
                f"Cannot edit {', '.join(sorted(blocked))} directly; relocate the asset instead"
            )

        asset = cls._get(asset_id)

        cls._validate(updates)
        writable = Asset.column_names() - set(Asset.protected_fields)
        unknown = set(updates) - writable
        if unknown:
            raise ValueError(f"Unknown asset fields: {', '.join(sorted(unknown))}")
        cls._check_assignment(
            updates.get('status', asset.status),
            updates.get('assigned_to_name', asset.assigned_to_name),
            updates.get('assigned_to_position', asset.assigned_to_position),
        )

        for field, value in updates.items():
            setattr(asset, field, value)
        cls._apply_rules(asset)
        db.session.commit()
        logger.info(f"Asset updated: {asset.fixed_asset_id} ({', '.join(sorted(updates)) or 'no changes'})")
        return asset

    @classmethod
    def assign_asset(cls, asset_id: int, name: str, position: str) -> Asset:
        """
        Hand an asset to a new custodian, starting a new assignment.

        Raises:
            NotFound: If the asset does not exist
            ValueError: If name or position is blank
        """
        cls._check_assignment('assigned', name, position)
        asset = cls._get(asset_id)

        asset.status = 'assigned'
        asset.assigned_to_name = name
        asset.assigned_to_position = position
        asset.assigned_at = utc_now()
        cls._apply_rules(asset)
        db.session.commit()
        logger.info(f"Asset {asset.fixed_asset_id} assigned to {asset.assigned_to_name}")
        return asset

    @classmethod
    def return_to_storage(cls, asset_id: int) -> Asset:
        """
        Take an asset back from its custodian into storage.

        Raises:
            NotFound: If the asset does not exist
        """
        asset = cls._get(asset_id)
        previous = asset.assigned_to_name

        asset.status = 'storage'
        cls._apply_rules(asset)
        db.session.commit()
        logger.info(f"Asset {asset.fixed_asset_id} returned to storage (was {previous or 'unassigned'})")
        return asset
