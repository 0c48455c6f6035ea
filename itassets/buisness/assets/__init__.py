"""
Assets business layer.

Main entry points: allocate_fixed_asset_code, relocate_asset, AssetFactory
"""

from itassets.buisness.assets.fixed_asset_code_allocator import allocate_fixed_asset_code
from itassets.buisness.assets.relocation import RelocationResult, relocate_asset
from itassets.buisness.assets.asset_factory import AssetFactory

__all__ = [
    'allocate_fixed_asset_code',
    'RelocationResult',
    'relocate_asset',
    'AssetFactory',
]
