#!/usr/bin/env python3
"""
Database build for the IT asset registry
Creates tables and optionally seeds demo sites, suppliers and assets
"""

from itassets import db
from itassets.logger import get_logger

logger = get_logger("itassets.build")

DEMO_SITES = [
    {'name': 'Medicuc Soacha', 'city': 'Soacha', 'address': 'Calle 13 # 7-21'},
    {'name': 'Medicuc Bogota', 'city': 'Bogota', 'address': 'Carrera 15 # 93-60'},
    {'name': 'Salud Familia Sabana', 'city': 'Chia', 'address': 'Avenida Pradilla # 5-31'},
]

DEMO_SUPPLIERS = [
    {'name': 'TecnoGlobal SAS', 'nit': '900123456-1', 'category': 'Hardware'},
]

DEMO_ASSETS = [
    {'site': 'Medicuc Soacha', 'asset_type': 'laptop', 'brand': 'Lenovo', 'model': 'ThinkPad E14', 'serial': 'PF3K2L9'},
    {'site': 'Medicuc Soacha', 'asset_type': 'printer', 'brand': 'Epson', 'model': 'L3250', 'serial': 'X8M4002211'},
    {'site': 'Salud Familia Sabana', 'asset_type': 'desktop', 'brand': 'HP', 'model': 'ProDesk 400', 'serial': 'MXL2381QZ'},
]


def build_tables():
    """Create every registered table that does not exist yet"""
    db.create_all()
    logger.info("Tables created")


def seed_demo_data():
    """
    Insert demo rows through the business layer so prefixes and codes are allocated normally.

    Skipped when any site already exists.
    """
    from itassets.data.core.site import Site
    from itassets.data.finance.supplier import Supplier
    from itassets.buisness.sites.site_factory import SiteFactory
    from itassets.buisness.assets.asset_factory import AssetFactory

    if Site.query.first() is not None:
        logger.info("Sites already present, skipping demo data")
        return

    sites = {}
    for site_data in DEMO_SITES:
        site = SiteFactory.create_site(**site_data)
        sites[site.name] = site.id

    for supplier_data in DEMO_SUPPLIERS:
        supplier = Supplier.from_dict(supplier_data)
        db.session.add(supplier)
    db.session.commit()

    for asset_data in DEMO_ASSETS:
        asset_data = dict(asset_data)
        site_id = sites[asset_data.pop('site')]
        AssetFactory.create_asset(site_id, **asset_data)

    logger.info(f"Demo data inserted: {len(DEMO_SITES)} sites, {len(DEMO_ASSETS)} assets")


def build_database(seed_demo=False):
    """
    Build the database

    Args:
        seed_demo (bool): Insert demo sites, suppliers and assets after creating tables
    """
    build_tables()
    if seed_demo:
        seed_demo_data()
