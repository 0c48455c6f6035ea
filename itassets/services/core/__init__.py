"""
Core Services
Presentation services for sites and assets
"""

from .asset_service import AssetService
from .site_service import SiteService

__all__ = [
    'AssetService',
    'SiteService',
]
