"""
Sequence counters
Per-site counters used to build fixed asset codes
"""

from itassets.data.core.sequences.site_asset_sequence import SiteAssetSequence, format_fixed_asset_code

__all__ = [
    'SiteAssetSequence',
    'format_fixed_asset_code',
]
