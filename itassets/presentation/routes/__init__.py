"""
Routes package for the IT asset registry
JSON blueprints over the business layer, all mounted under /api
"""

from itassets.logger import get_logger

logger = get_logger("itassets.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from . import sites, assets, finance, errors

    app.register_blueprint(sites.bp, url_prefix='/api')
    app.register_blueprint(assets.bp, url_prefix='/api')
    app.register_blueprint(finance.bp, url_prefix='/api')

    errors.register_error_handlers(app)
