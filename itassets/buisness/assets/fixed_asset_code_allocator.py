"""
Fixed Asset Code Allocator
Combines a site's prefix with its next sequence value: "MSOA-001", "MSOA-002", ...
"""

from itassets.buisness.core.transaction import run_transaction
from itassets.data.core.sequences.site_asset_sequence import SiteAssetSequence
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.assets.code_allocator")


def allocate_fixed_asset_code(site_id: int) -> str:
    """
    Allocate the next fixed asset code of a site in its own transaction.

    Once this returns, the counter has advanced and the code is spent, even if
    the caller later fails to persist an asset with it.

    Raises:
        NotFound: If the site does not exist
        TransactionConflict: If the storage layer kept conflicting
    """
    code = run_transaction(lambda session: SiteAssetSequence.next_code(session, site_id))
    logger.info(f"Allocated fixed asset code {code} for site {site_id}")
    return code
