"""
Site Service
Presentation service for site listings, the prefix preview shown while typing a site name
and the next fixed asset code preview.
"""

from typing import Dict, List, Optional
from itassets import db
from itassets.data.core.site import Site
from itassets.data.core.asset import Asset
from itassets.data.core.sequences.site_asset_sequence import SiteAssetSequence
from itassets.buisness.core.errors import NotFound
from itassets.buisness.sites.prefix_allocator import PrefixChoice, pick_unique_prefix
from itassets.buisness.sites.site_factory import used_prefixes


class SiteService:
    """
    Service for site presentation data.
    """

    @staticmethod
    def get_list_data(search: Optional[str] = None) -> List[Site]:
        """
        Sites ordered by name, optionally filtered by a case-insensitive
        match on name, city, address or prefix.
        """
        sites = Site.query.order_by(Site.name.asc()).all()
        query = (search or '').strip().lower()
        if not query:
            return sites
        return [
            site for site in sites
            if query in site.name.lower()
            or query in site.city.lower()
            or query in site.address.lower()
            or query in site.prefix.lower()
        ]

    @staticmethod
    def asset_counts() -> Dict[int, int]:
        rows = db.session.query(Asset.site_id, db.func.count(Asset.id)).group_by(Asset.site_id).all()
        return {site_id: count for site_id, count in rows}

    @staticmethod
    def preview_prefix(name: str, editing_site_id: Optional[int] = None) -> PrefixChoice:
        """
        Prefix the site editor would save.

        While editing, the stored prefix is returned unchanged.
        """
        if editing_site_id is not None:
            site = db.session.get(Site, editing_site_id)
            if site is None:
                raise NotFound("Site", editing_site_id)
            return pick_unique_prefix(name, (), current_prefix=site.prefix)
        return pick_unique_prefix(name, used_prefixes())

    @staticmethod
    def next_code_preview(site_id: int) -> str:
        """Fixed asset code the asset form shows before saving"""
        return SiteAssetSequence.preview_code(db.session, site_id)
