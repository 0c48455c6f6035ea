"""
Site Lock Policy

Enforces which site fields an edit may touch.

Field Categories:
- ALWAYS_LOCKED: Never editable (prefix is fixed at creation, asset_seq belongs to the allocator)
- ALWAYS_EDITABLE: Descriptive fields an operator may change at any time
"""

from typing import Any, Dict, Set
from itassets.buisness.core.errors import PrefixLockedError


class SiteLockPolicy:
    """
    Rejects site updates that would touch allocation state.
    """

    ALWAYS_LOCKED: Set[str] = {
        'prefix',
        'asset_seq',
    }

    ALWAYS_EDITABLE: Set[str] = {
        'name',
        'city',
        'address',
        'company_id',
    }

    @classmethod
    def check(cls, updates: Dict[str, Any]) -> None:
        """
        Check if updates violate the lock policy.

        Raises:
            PrefixLockedError: If prefix or asset_seq are being modified
            ValueError: If unknown fields are being modified
        """
        locked = set(updates.keys()) & cls.ALWAYS_LOCKED
        if locked:
            raise PrefixLockedError(
                f"Cannot modify allocation fields of a site. "
                f"Attempted to modify: {', '.join(sorted(locked))}."
            )

        unknown = set(updates.keys()) - cls.ALWAYS_EDITABLE
        if unknown:
            raise ValueError(f"Unknown site fields: {', '.join(sorted(unknown))}")
