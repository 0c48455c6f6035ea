"""
Asset routes
Registration with automatic fixed asset code, edits, relocation and code lookup
"""

from flask import Blueprint, current_app, jsonify, request
from itassets import db, limiter
from itassets.data.core.asset import Asset
from itassets.buisness.assets.asset_factory import AssetFactory
from itassets.buisness.assets.relocation import relocate_asset
from itassets.buisness.core.errors import NotFound
from itassets.services.core.asset_service import AssetService
from itassets.logger import get_logger

bp = Blueprint('assets', __name__)
logger = get_logger("itassets.routes.assets")


def _allocation_limit():
    return current_app.config['ALLOCATION_RATE_LIMIT']


def _serialize(asset: Asset) -> dict:
    body = asset.to_dict(exclude={'version'})
    body['code_history'] = AssetService.code_history(asset)
    return body


@bp.route('/assets', methods=['GET'])
def list_assets():
    query = AssetService.build_filtered_query(
        site_id=request.args.get('site_id', type=int),
        status=request.args.get('status'),
        asset_type=request.args.get('asset_type'),
        serial=request.args.get('serial'),
        assigned_to=request.args.get('assigned_to'),
        search=request.args.get('q'),
    )
    return jsonify([_serialize(asset) for asset in query.all()])


@bp.route('/assets', methods=['POST'])
@limiter.limit(_allocation_limit)
def create_asset():
    """Register an asset; its code comes from the site's counter"""
    data = dict(request.get_json(silent=True) or {})
    site_id = data.pop('site_id', None)
    if site_id is None:
        raise ValueError("Select a site")
    asset = AssetFactory.create_asset(int(site_id), **data)
    return jsonify(_serialize(asset)), 201


@bp.route('/assets/<int:asset_id>', methods=['GET'])
def asset_detail(asset_id):
    asset = db.session.get(Asset, asset_id)
    if asset is None:
        raise NotFound("Asset", asset_id)
    return jsonify(_serialize(asset))


@bp.route('/assets/<int:asset_id>', methods=['PATCH'])
def edit_asset(asset_id):
    asset = AssetFactory.update_asset(asset_id, **(request.get_json(silent=True) or {}))
    return jsonify(_serialize(asset))


@bp.route('/assets/<int:asset_id>/relocate', methods=['POST'])
@limiter.limit(_allocation_limit)
def relocate(asset_id):
    """Move an asset to another site, issuing a new code from that site"""
    data = request.get_json(silent=True) or {}
    site_id = data.get('site_id')
    if site_id is None:
        raise ValueError("Select a site")
    result = relocate_asset(asset_id, int(site_id))
    return jsonify(result.to_dict())


@bp.route('/assets/by-code/<code>', methods=['GET'])
def asset_by_code(code):
    """Find an asset by its current or any previous fixed asset code"""
    asset = AssetService.find_by_code(code)
    if asset is None:
        raise NotFound("Asset", code)
    return jsonify(_serialize(asset))


@bp.route('/assets/<int:asset_id>/assign', methods=['POST'])
def assign(asset_id):
    """Hand the asset to a custodian; starts a new assignment"""
    data = request.get_json(silent=True) or {}
    asset = AssetFactory.assign_asset(asset_id, data.get('name'), data.get('position'))
    return jsonify(_serialize(asset))


@bp.route('/assets/<int:asset_id>/return', methods=['POST'])
def return_to_storage(asset_id):
    asset = AssetFactory.return_to_storage(asset_id)
    return jsonify(_serialize(asset))
