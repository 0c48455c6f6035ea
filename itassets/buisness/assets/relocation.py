"""
Asset Relocation

Moves an asset to another site. The asset receives a brand-new code from the
destination site's counter and its superseded code is archived, all in one
transaction: either the destination counter advances and the asset is
updated, or neither happens.
"""

from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy.orm import Session
from itassets.data.core.asset import Asset, CODE_HISTORY_LIMIT
from itassets.data.core.record_base import utc_now
from itassets.data.core.sequences.site_asset_sequence import SiteAssetSequence
from itassets.buisness.core.errors import NotFound
from itassets.buisness.core.transaction import run_transaction
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.assets.relocation")


@dataclass(frozen=True)
class RelocationResult:
    changed: bool
    fixed_asset_id: str
    site_id: int

    def to_dict(self):
        return {
            'changed': self.changed,
            'fixed_asset_id': self.fixed_asset_id,
            'site_id': self.site_id,
        }


def archive_code(history: Optional[List[str]], code: Optional[str], limit: int = CODE_HISTORY_LIMIT) -> List[str]:
    """
    Append ``code`` to a code history, most recent last.

    An existing occurrence is moved to the tail instead of duplicated, and
    only the last ``limit`` entries are kept.
    """
    entries = [entry for entry in (history or []) if entry and entry != code]
    if code:
        entries.append(code)
    return entries[-limit:]


def _relocate(session: Session, asset_id: int, new_site_id: int) -> RelocationResult:
    asset = session.get(Asset, asset_id, with_for_update=True, populate_existing=True)
    if asset is None:
        raise NotFound("Asset", asset_id)

    if asset.site_id == new_site_id:
        return RelocationResult(changed=False, fixed_asset_id=asset.fixed_asset_id, site_id=asset.site_id)

    new_code = SiteAssetSequence.next_code(session, new_site_id)

    old_site_id = asset.site_id
    old_code = asset.fixed_asset_id

    # Assign a new list so the JSON column is flagged dirty
    asset.previous_fixed_asset_ids = archive_code(asset.previous_fixed_asset_ids, old_code)
    asset.site_id = new_site_id
    asset.fixed_asset_id = new_code
    asset.moved_at = utc_now()
    asset.moved_from_site_id = old_site_id
    session.flush()

    logger.info(f"Asset {asset_id} relocated from site {old_site_id} to {new_site_id}: {old_code} -> {new_code}")
    return RelocationResult(changed=True, fixed_asset_id=new_code, site_id=new_site_id)


def relocate_asset(asset_id: int, new_site_id: int) -> RelocationResult:
    """
    Move an asset to ``new_site_id``.

    Relocating to the asset's current site is a no-op that consumes no counter value.

    Raises:
        NotFound: If the asset or the destination site does not exist
        TransactionConflict: If the storage layer kept conflicting
    """
    return run_transaction(lambda session: _relocate(session, asset_id, new_site_id))
