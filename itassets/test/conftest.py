"""
Pytest configuration and fixtures for the IT asset registry
"""
import os
import pytest

# Must be set before the app package configures logging
os.environ.setdefault('SECRET_KEY', 'test_secret_key_for_itassets')
os.environ.setdefault('ITASSETS_LOG_TO_FILE', 'False')

from itassets import create_app
from itassets import db as _db


@pytest.fixture(scope='function')
def app(tmp_path):
    """Flask application backed by a throwaway SQLite file (threads share it)"""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'itassets_test.db'}",
        'RATELIMIT_ENABLED': False,
        'TRANSACTION_MAX_ATTEMPTS': 10,
        'TRANSACTION_RETRY_BACKOFF_SECONDS': 0.01,
    })

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()
        _db.engine.dispose()


@pytest.fixture(scope='function')
def db(app):
    return _db


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def make_site(app):
    """Create a site through the factory"""
    from itassets.buisness.sites.site_factory import SiteFactory

    def _make_site(name, city='Bogota', address='Calle 1 # 2-3', **kwargs):
        return SiteFactory.create_site(name=name, city=city, address=address, **kwargs)

    return _make_site


@pytest.fixture(scope='function')
def make_asset(app):
    """Register an asset through the factory"""
    from itassets.buisness.assets.asset_factory import AssetFactory

    counter = {'n': 0}

    def _make_asset(site_id, **kwargs):
        counter['n'] += 1
        kwargs.setdefault('brand', 'Lenovo')
        kwargs.setdefault('serial', f"SN-{counter['n']:04d}")
        kwargs.setdefault('asset_type', 'laptop')
        return AssetFactory.create_asset(site_id, **kwargs)

    return _make_asset
