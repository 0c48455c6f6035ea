"""
Core models package: sites and the assets they hold
"""

from .site import Site
from .asset import Asset

__all__ = [
    'Site',
    'Asset',
]
