#!/usr/bin/env python3
"""
Site Asset Sequence
Per-site monotonic counter backing fixed asset codes (sites.asset_seq)
"""

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session
from itassets.data.core.site import Site
from itassets.buisness.core.errors import NotFound

# Used when a legacy site row carries no prefix
FALLBACK_PREFIX = 'GEN'


def format_fixed_asset_code(prefix: str, seq: int) -> str:
    """PREFIX-NNN, zero padded to three digits and growing past 999"""
    return f"{prefix}-{seq:03d}"


class SiteAssetSequence:
    """
    Counter stored on the site row itself.

    Every increment is a single UPDATE on the site row followed by a read of
    the new value, both on the caller's session. The UPDATE takes the row (or
    database) write lock, so concurrent callers are serialized by the storage
    engine and each observes a distinct value. The caller owns the transaction.
    """

    @classmethod
    def next_value(cls, session: Session, site_id: int) -> tuple[str, int]:
        """
        Advance the counter of ``site_id`` by one.

        Args:
            session: Session whose transaction the increment joins
            site_id: Site whose counter advances

        Returns:
            tuple: (prefix, new counter value)

        Raises:
            NotFound: If the site does not exist (nothing is written)
        """
        result = session.execute(
            update(Site)
            .where(Site.id == site_id)
            .values(asset_seq=func.coalesce(Site.asset_seq, 0) + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFound("Site", site_id)

        prefix, value = session.execute(
            select(Site.prefix, Site.asset_seq).where(Site.id == site_id)
        ).one()
        return prefix or FALLBACK_PREFIX, value

    @classmethod
    def next_code(cls, session: Session, site_id: int) -> str:
        """Advance the counter and return the resulting fixed asset code"""
        prefix, value = cls.next_value(session, site_id)
        return format_fixed_asset_code(prefix, value)

    @classmethod
    def current_value(cls, session: Session, site_id: int) -> int:
        """
        Get the current counter value without advancing it
        """
        row = session.execute(
            select(Site.asset_seq).where(Site.id == site_id)
        ).first()
        if row is None:
            raise NotFound("Site", site_id)
        return row.asset_seq or 0

    @classmethod
    def preview_code(cls, session: Session, site_id: int) -> str:
        """
        Code the next allocation would produce, without advancing the counter.

        Only a hint: a concurrent allocation may take this value first.
        """
        value = cls.current_value(session, site_id)
        prefix = session.execute(
            select(Site.prefix).where(Site.id == site_id)
        ).scalar_one()
        return format_fixed_asset_code(prefix or FALLBACK_PREFIX, value + 1)
