"""
Sites business layer.

- site_naming: tokenizer and prefix candidate generator
- prefix_allocator: first free candidate, loud failure on collision
- SiteFactory: create / edit / delete, the only place a prefix is assigned
- SiteLockPolicy: prefix and counter are never editable
"""

from itassets.buisness.sites.site_naming import generate_prefix_candidates, tokenize_site_name
from itassets.buisness.sites.prefix_allocator import PrefixChoice, pick_unique_prefix
from itassets.buisness.sites.site_factory import SiteFactory

__all__ = [
    'generate_prefix_candidates',
    'tokenize_site_name',
    'PrefixChoice',
    'pick_unique_prefix',
    'SiteFactory',
]
