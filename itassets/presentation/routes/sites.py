"""
Site routes
Site listing, creation with automatic prefix, edits and deletion
"""

from flask import Blueprint, jsonify, request
from itassets.buisness.sites.site_factory import SiteFactory
from itassets.services.core.site_service import SiteService
from itassets.logger import get_logger

bp = Blueprint('sites', __name__)
logger = get_logger("itassets.routes.sites")


def _payload():
    return request.get_json(silent=True) or {}


@bp.route('/sites', methods=['GET'])
def list_sites():
    """List sites with their asset counts"""
    sites = SiteService.get_list_data(request.args.get('q'))
    counts = SiteService.asset_counts()
    return jsonify([
        dict(site.to_dict(), asset_count=counts.get(site.id, 0))
        for site in sites
    ])


@bp.route('/sites', methods=['POST'])
def create_site():
    """Create a site; the prefix is derived from the name"""
    data = _payload()
    site = SiteFactory.create_site(
        name=data.get('name'),
        city=data.get('city'),
        address=data.get('address'),
        company_id=data.get('company_id'),
    )
    body = site.to_dict()
    body['prefix_note'] = site.prefix_note
    return jsonify(body), 201


@bp.route('/sites/prefix-preview', methods=['POST'])
def prefix_preview():
    """Prefix the editor would save for the given name"""
    data = _payload()
    choice = SiteService.preview_prefix(data.get('name', ''), data.get('site_id'))
    return jsonify({'prefix': choice.prefix, 'unique': choice.unique, 'note': choice.note})


@bp.route('/sites/<int:site_id>', methods=['PATCH'])
def edit_site(site_id):
    """Edit descriptive site fields; prefix and counter are locked"""
    site = SiteFactory.update_site(site_id, **_payload())
    return jsonify(site.to_dict())


@bp.route('/sites/<int:site_id>', methods=['DELETE'])
def delete_site(site_id):
    SiteFactory.delete_site(site_id)
    return '', 204


@bp.route('/sites/<int:site_id>/next-code-preview', methods=['GET'])
def next_code_preview(site_id):
    """Code the next asset registered at this site would get; nothing is allocated"""
    return jsonify({'site_id': site_id, 'next_code': SiteService.next_code_preview(site_id)})
