"""
Finance routes
Suppliers and supplier invoices
"""

from flask import Blueprint, jsonify, request
from itassets import db
from itassets.data.finance.supplier import Supplier
from itassets.buisness.finance.invoice_manager import InvoiceManager
from itassets.buisness.finance.invoice_policies import is_duplicate_invoice_number
from itassets.services.finance.invoice_service import InvoiceService
from itassets.logger import get_logger

bp = Blueprint('finance', __name__)
logger = get_logger("itassets.routes.finance")


@bp.route('/suppliers', methods=['GET'])
def list_suppliers():
    suppliers = Supplier.query.order_by(Supplier.name.asc()).all()
    return jsonify([supplier.to_dict() for supplier in suppliers])


# ROUTE_TYPE: SIMPLE_CRUD (CREATE)
# EXCEPTION: Direct ORM usage allowed for supplier creation.
# Rationale: Suppliers carry no allocation logic.
@bp.route('/suppliers', methods=['POST'])
def create_supplier():
    data = request.get_json(silent=True) or {}
    if not str(data.get('name') or '').strip() or not str(data.get('nit') or '').strip():
        raise ValueError("Complete at least the supplier name and NIT")
    nit = str(data['nit']).strip()
    if Supplier.query.filter_by(nit=nit).first():
        raise ValueError("A supplier with that NIT already exists")

    supplier = Supplier.from_dict(data)
    supplier.name = str(supplier.name).strip()
    supplier.nit = nit
    db.session.add(supplier)
    db.session.commit()
    logger.info(f"Supplier created: {supplier.name} (ID: {supplier.id})")
    return jsonify(supplier.to_dict()), 201


@bp.route('/invoices', methods=['GET'])
def list_invoices():
    supplier_id = request.args.get('supplier_id', type=int)
    number = request.args.get('number')
    if number:
        invoices = InvoiceService.search_by_number(number, supplier_id)
    else:
        invoices = InvoiceService.list_invoices(supplier_id)
    return jsonify([invoice.to_dict() for invoice in invoices])


@bp.route('/invoices', methods=['POST'])
def create_invoice():
    invoice = InvoiceManager.create_invoice(**(request.get_json(silent=True) or {}))
    return jsonify(invoice.to_dict()), 201


@bp.route('/invoices/<int:invoice_id>', methods=['PATCH'])
def edit_invoice(invoice_id):
    invoice = InvoiceManager.update_invoice(invoice_id, **(request.get_json(silent=True) or {}))
    return jsonify(invoice.to_dict())


@bp.route('/invoices/duplicate-check', methods=['GET'])
def duplicate_check():
    """Let the invoice form warn before saving"""
    supplier_id = request.args.get('supplier_id', type=int)
    number = request.args.get('number', '')
    if supplier_id is None:
        raise ValueError("supplier_id is required")
    duplicate = is_duplicate_invoice_number(
        supplier_id, number, request.args.get('excluding_id', type=int)
    )
    return jsonify({'duplicate': duplicate})
