"""
Prefix Allocator

Picks the first prefix candidate not used by another site. It never hands
out a duplicate: when every candidate is taken the primary candidate comes
back flagged as non-unique and the caller must block the save.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
from itassets.buisness.sites.site_naming import (
    EMPTY_PREFIX,
    generate_prefix_candidates,
    normalize_prefix,
)
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.sites.prefix_allocator")

LOCKED_NOTE = "Prefix locked: it does not change when a site is edited."


@dataclass(frozen=True)
class PrefixChoice:
    prefix: str
    unique: bool
    note: str = ''


def pick_unique_prefix(
    name: str,
    used_prefixes: Iterable[str],
    current_prefix: Optional[str] = None
) -> PrefixChoice:
    """
    Choose the prefix for a site.

    Args:
        name: Free-text site name
        used_prefixes: Prefixes held by OTHER sites
        current_prefix: Stored prefix when editing an existing site

    Returns:
        PrefixChoice: prefix, whether it is unique, and a note for the user
    """
    if current_prefix is not None:
        return PrefixChoice(prefix=normalize_prefix(current_prefix), unique=True, note=LOCKED_NOTE)

    used = set(used_prefixes)
    candidates = generate_prefix_candidates(name)
    base = candidates[0] if candidates else EMPTY_PREFIX

    for candidate in candidates:
        if candidate not in used:
            note = ''
            if candidate != base:
                note = f"Prefix adjusted automatically: {base} already exists, {candidate} will be used."
                logger.info(f"Prefix for '{name}' adjusted from {base} to {candidate}")
            return PrefixChoice(prefix=candidate, unique=True, note=note)

    logger.warning(f"No unique prefix available for '{name}' (tried {', '.join(candidates)})")
    return PrefixChoice(
        prefix=base,
        unique=False,
        note=f"Could not generate a unique prefix (e.g. {base}). Rename the site or contact an administrator.",
    )
