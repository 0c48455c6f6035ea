"""
Tests for site creation, edits and the prefix lock
"""

import pytest
from itassets.data.core.site import Site
from itassets.buisness.core.errors import NotFound, PrefixCollision, PrefixLockedError
from itassets.buisness.sites.site_factory import SiteFactory, used_prefixes
from itassets.buisness.sites.site_lock_policy import SiteLockPolicy
from itassets.services.core.site_service import SiteService


def test_create_site_assigns_prefix_and_zero_counter(app, make_site):
    site = make_site("Medicuc Soacha")
    assert site.id is not None
    assert site.prefix == 'MSOA'
    assert site.asset_seq == 0
    assert site.prefix_note == ''


def test_create_site_adjusts_colliding_prefix(app, make_site):
    make_site("TecnoGlobal Bogota")
    second = make_site("TecnoGlobal Bogotana")
    assert second.prefix == 'TEBO'
    assert 'TBOG' in second.prefix_note


def test_create_site_blocks_when_no_unique_prefix(app, make_site, db):
    for name in ("Medicuc Soacha", "Medicuc Soachita", "Medicuc Soachona", "Medicuc Soa"):
        make_site(name)
    assert used_prefixes() == {'MSOA', 'MESO', 'MEDS', 'MEDI'}

    with pytest.raises(PrefixCollision):
        make_site("Medicuc Soacha")
    assert db.session.query(Site).count() == 4, "Blocked save must not insert a site"


@pytest.mark.parametrize("name", ["Medicuc", "de la", "", "   "])
def test_create_site_requires_two_words(app, make_site, name):
    with pytest.raises(ValueError):
        make_site(name)


def test_create_site_requires_city_and_address(app, make_site):
    with pytest.raises(ValueError):
        make_site("Medicuc Soacha", city=' ')
    with pytest.raises(ValueError):
        make_site("Medicuc Soacha", address='')


def test_update_site_keeps_prefix_when_renamed(app, make_site):
    site = make_site("Medicuc Soacha")
    updated = SiteFactory.update_site(site.id, name="Salud Familia Sabana", city="Soacha")
    assert updated.name == "Salud Familia Sabana"
    assert updated.prefix == 'MSOA', "Renaming must not recompute the prefix"


def test_update_site_rejects_locked_fields(app, make_site):
    site = make_site("Medicuc Soacha")
    with pytest.raises(PrefixLockedError):
        SiteFactory.update_site(site.id, prefix='ZZZZ')
    with pytest.raises(PrefixLockedError):
        SiteFactory.update_site(site.id, asset_seq=99)


def test_update_site_rejects_unknown_fields(app, make_site):
    site = make_site("Medicuc Soacha")
    with pytest.raises(ValueError):
        SiteFactory.update_site(site.id, color='red')


def test_update_missing_site(app):
    with pytest.raises(NotFound):
        SiteFactory.update_site(9999, name="Medicuc Soacha")


def test_model_rejects_prefix_change_on_persisted_site(app, make_site, db):
    site = make_site("Medicuc Soacha")
    with pytest.raises(PrefixLockedError):
        site.prefix = 'ZZZZ'
    db.session.rollback()
    assert db.session.get(Site, site.id).prefix == 'MSOA'


def test_lock_policy_lists():
    assert 'prefix' in SiteLockPolicy.ALWAYS_LOCKED
    assert 'asset_seq' in SiteLockPolicy.ALWAYS_LOCKED
    SiteLockPolicy.check({'name': 'x', 'city': 'y'})


def test_delete_site_with_assets_is_refused(app, make_site, make_asset, db):
    site = make_site("Medicuc Soacha")
    make_asset(site.id)
    with pytest.raises(ValueError):
        SiteFactory.delete_site(site.id)
    assert db.session.get(Site, site.id) is not None


def test_delete_site_without_assets_frees_prefix(app, make_site, db):
    site = make_site("Medicuc Soacha")
    SiteFactory.delete_site(site.id)
    assert db.session.get(Site, site.id) is None
    assert 'MSOA' not in used_prefixes()


def test_preview_prefix_matches_creation(app, make_site):
    make_site("Medicuc Soacha")
    preview = SiteService.preview_prefix("Medicuc Soachita")
    created = make_site("Medicuc Soachita")
    assert preview.prefix == created.prefix == 'MESO'


def test_preview_prefix_while_editing_returns_stored_prefix(app, make_site):
    site = make_site("Medicuc Soacha")
    preview = SiteService.preview_prefix("Another Name Entirely", editing_site_id=site.id)
    assert preview.prefix == 'MSOA'
    assert preview.unique


def test_site_list_search(app, make_site):
    make_site("Medicuc Soacha", city="Soacha")
    make_site("Salud Familia Sabana", city="Chia")
    assert [s.prefix for s in SiteService.get_list_data("chia")] == ['SFSA']
    assert len(SiteService.get_list_data()) == 2
