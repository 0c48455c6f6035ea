"""
Basic build test - app factory, table creation, demo data and logging
"""

import json
import logging
import pytest
from itassets import create_app
from itassets.build import DEMO_ASSETS, DEMO_SITES, build_database
from itassets.data.core.site import Site
from itassets.data.core.asset import Asset
from itassets.logger import JsonFormatter, get_logger


def test_create_app_requires_secret_key(monkeypatch):
    monkeypatch.delenv('SECRET_KEY', raising=False)
    with pytest.raises(RuntimeError):
        create_app({'SQLALCHEMY_DATABASE_URI': 'sqlite://'})


def test_build_database_seeds_demo_data_once(app, db):
    build_database(seed_demo=True)
    build_database(seed_demo=True)

    assert db.session.query(Site).count() == len(DEMO_SITES)
    assert db.session.query(Asset).count() == len(DEMO_ASSETS)
    prefixes = {site.prefix for site in Site.query.all()}
    assert prefixes == {'MSOA', 'MBOG', 'SFSA'}
    codes = {asset.fixed_asset_id for asset in Asset.query.all()}
    assert codes == {'MSOA-001', 'MSOA-002', 'SFSA-001'}


def test_get_logger_nests_under_root():
    assert get_logger("itassets.buisness.assets").name == "itassets.buisness.assets"
    assert get_logger("scripts").name == "itassets.scripts"
    assert get_logger().name == "itassets"


def test_json_formatter_output():
    formatter = JsonFormatter({"level": "levelname", "message": "message"})
    record = logging.LogRecord("itassets", logging.INFO, __file__, 1, "Allocated %s", ("MSOA-001",), None)
    assert json.loads(formatter.format(record)) == {"level": "INFO", "message": "Allocated MSOA-001"}
