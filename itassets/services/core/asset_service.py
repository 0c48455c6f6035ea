"""
Asset Service
Presentation service for asset lookups and filtered listings.
"""

from typing import List, Optional
from sqlalchemy import or_
from itassets.data.core.asset import Asset


class AssetService:
    """
    Service for asset presentation data.
    """

    @staticmethod
    def build_filtered_query(
        site_id: Optional[int] = None,
        status: Optional[str] = None,
        asset_type: Optional[str] = None,
        serial: Optional[str] = None,
        assigned_to: Optional[str] = None,
        search: Optional[str] = None
    ):
        """
        Build a filtered asset query, newest first.

        ``search`` matches serial, model, fixed asset code or custodian name.
        """
        query = Asset.query

        if site_id:
            query = query.filter(Asset.site_id == site_id)

        if status:
            query = query.filter(Asset.status == status)

        if asset_type:
            query = query.filter(Asset.asset_type == asset_type)

        if serial:
            query = query.filter(Asset.serial.ilike(f'%{serial}%'))

        if assigned_to:
            query = query.filter(Asset.assigned_to_name.ilike(f'%{assigned_to.strip()}%'))

        if search and search.strip():
            pattern = f'%{search.strip()}%'
            query = query.filter(or_(
                Asset.serial.ilike(pattern),
                Asset.model.ilike(pattern),
                Asset.fixed_asset_id.ilike(pattern),
                Asset.assigned_to_name.ilike(pattern),
            ))

        return query.order_by(Asset.created_at.desc())

    @staticmethod
    def find_by_code(code: str) -> Optional[Asset]:
        """
        Resolve an asset by its current fixed asset code or by any archived one.

        A current code always wins over an archived one.
        """
        code = (code or '').strip().upper()
        if not code:
            return None

        current = Asset.query.filter_by(fixed_asset_id=code).first()
        if current is not None:
            return current

        # Archived codes live in a JSON list; scan the candidates in Python
        candidates = Asset.query.filter(Asset.moved_at.isnot(None)).all()
        for asset in candidates:
            if code in (asset.previous_fixed_asset_ids or []):
                return asset
        return None

    @staticmethod
    def code_history(asset: Asset) -> List[str]:
        """Every code the asset has held, oldest first, ending with the current one"""
        return list(asset.previous_fixed_asset_ids or []) + [asset.fixed_asset_id]
