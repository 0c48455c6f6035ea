"""
Site Factory
Creates, edits and deletes sites.

Creation is the only code path that assigns a prefix. Edits go through
SiteLockPolicy and never recompute it.
"""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from itassets import db
from itassets.data.core.site import Site
from itassets.data.core.asset import Asset
from itassets.buisness.core.errors import NotFound, PrefixCollision
from itassets.buisness.sites.site_naming import PREFIX_PATTERN, tokenize_site_name
from itassets.buisness.sites.prefix_allocator import PrefixChoice, pick_unique_prefix
from itassets.buisness.sites.site_lock_policy import SiteLockPolicy
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.sites")


def _required(value, label: str) -> str:
    text = str(value or '').strip()
    if not text:
        raise ValueError(f"Site {label} is required")
    return text


def used_prefixes(excluding_site_id: Optional[int] = None) -> set:
    """Prefixes held by every site except ``excluding_site_id``"""
    query = select(Site.prefix)
    if excluding_site_id is not None:
        query = query.where(Site.id != excluding_site_id)
    return {prefix for prefix in db.session.execute(query).scalars() if prefix}


class SiteFactory:
    """Site lifecycle operations"""

    @staticmethod
    def validate_name(name: str) -> str:
        name = _required(name, 'name')
        if len(tokenize_site_name(name)) < 2:
            raise ValueError('Site name must include company and site (e.g. "Medicuc Soacha")')
        return name

    @classmethod
    def choose_prefix(cls, name: str) -> PrefixChoice:
        """
        Pick the prefix for a new site, failing loudly on collision.

        Raises:
            PrefixCollision: If no unique candidate is available
        """
        choice = pick_unique_prefix(name, used_prefixes())
        if not PREFIX_PATTERN.match(choice.prefix):
            raise PrefixCollision("Could not generate the prefix automatically.", choice.prefix)
        if not choice.unique:
            raise PrefixCollision(choice.note, choice.prefix)
        return choice

    @classmethod
    def create_site(
        cls,
        name: str,
        city: str,
        address: str,
        company_id: Optional[str] = None,
        commit: bool = True
    ) -> Site:
        """
        Create a site with a freshly derived, unique prefix and a zero counter.

        Raises:
            ValueError: If a required field is blank or the name has fewer than 2 words
            PrefixCollision: If no unique prefix exists, or another site claimed it first
        """
        name = cls.validate_name(name)
        city = _required(city, 'city')
        address = _required(address, 'address')

        choice = cls.choose_prefix(name)

        site = Site(
            name=name,
            city=city,
            address=address,
            prefix=choice.prefix,
            asset_seq=0,
            company_id=company_id,
        )
        db.session.add(site)

        try:
            if commit:
                db.session.commit()
            else:
                db.session.flush()
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"Prefix {choice.prefix} was claimed concurrently while creating '{name}'")
            raise PrefixCollision(
                f"The generated prefix ({choice.prefix}) already exists on another site. Rename the site.",
                choice.prefix,
            ) from e

        if choice.note:
            logger.info(f"Site created: {site.name} -> {site.prefix} ({choice.note})")
        else:
            logger.info(f"Site created: {site.name} -> {site.prefix}")
        site.prefix_note = choice.note
        return site

    @classmethod
    def update_site(cls, site_id: int, commit: bool = True, **updates) -> Site:
        """
        Update descriptive fields of a site. The prefix and counter stay untouched.

        Raises:
            NotFound: If the site does not exist
            PrefixLockedError: If prefix or asset_seq are in ``updates``
        """
        SiteLockPolicy.check(updates)

        site = db.session.get(Site, site_id)
        if site is None:
            raise NotFound("Site", site_id)

        if 'name' in updates:
            updates['name'] = cls.validate_name(updates['name'])
        for field in ('city', 'address'):
            if field in updates:
                updates[field] = _required(updates[field], field)

        for field, value in updates.items():
            setattr(site, field, value)

        if commit:
            db.session.commit()
        logger.info(f"Site updated: {site.id} ({', '.join(sorted(updates)) or 'no changes'})")
        return site

    @classmethod
    def delete_site(cls, site_id: int, commit: bool = True) -> None:
        """
        Delete a site that no asset references.

        Raises:
            NotFound: If the site does not exist
            ValueError: If assets still belong to the site
        """
        site = db.session.get(Site, site_id)
        if site is None:
            raise NotFound("Site", site_id)

        in_use = db.session.execute(
            select(Asset.id).where(Asset.site_id == site_id).limit(1)
        ).first()
        if in_use is not None:
            raise ValueError("Cannot delete a site that still has assets")

        prefix = site.prefix
        db.session.delete(site)
        if commit:
            db.session.commit()
        logger.info(f"Site deleted: {site_id} ({prefix})")
