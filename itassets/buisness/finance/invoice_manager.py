"""
InvoiceManager - create and edit supplier invoices

Validation order: required fields, number, total, then the duplicate
number check. Nothing is written until every check passes.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
from sqlalchemy.exc import IntegrityError
from itassets import db
from itassets.data.core.site import Site
from itassets.data.finance.invoice import Invoice, INVOICE_STATUSES, normalize_invoice_number
from itassets.data.finance.supplier import Supplier
from itassets.buisness.core.errors import DuplicateInvoiceNumber, NotFound
from itassets.buisness.finance.invoice_policies import DuplicateInvoiceNumberSpecification
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.finance")

REQUIRED_FIELDS = ('supplier_id', 'site_id', 'number', 'description')


class InvoiceManager:
    """Invoice save paths guarded by the duplicate number rule"""

    @staticmethod
    def _coerce(fields: Dict[str, Any]) -> None:
        for field in ('date', 'due_date'):
            if isinstance(fields.get(field), str):
                fields[field] = date.fromisoformat(fields[field]) if fields[field] else None

        if 'total' in fields:
            try:
                total = Decimal(str(fields['total']))
            except InvalidOperation:
                raise ValueError("Enter a valid invoice total")
            if not total.is_finite() or total <= 0:
                raise ValueError("Enter a valid invoice total")
            fields['total'] = total

        if 'status' in fields and fields['status'] not in INVOICE_STATUSES:
            raise ValueError(f"Unknown invoice status '{fields['status']}'")

        if 'number' in fields:
            fields['number'] = str(fields['number'] or '').strip()
            if not normalize_invoice_number(fields['number']):
                raise ValueError("Enter a valid invoice number")

    @staticmethod
    def _check_references(supplier_id: Optional[int], site_id: Optional[int]) -> None:
        if supplier_id is not None and db.session.get(Supplier, supplier_id) is None:
            raise NotFound("Supplier", supplier_id)
        if site_id is not None and db.session.get(Site, site_id) is None:
            raise NotFound("Site", site_id)

    @staticmethod
    def _commit(invoice: Invoice) -> None:
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"Duplicate invoice number lost a race: {invoice.number} (supplier {invoice.supplier_id})")
            raise DuplicateInvoiceNumber(invoice.supplier_id, invoice.number) from e

    @classmethod
    def create_invoice(cls, **fields) -> Invoice:
        """
        Create an invoice.

        Raises:
            ValueError: If required fields are missing or invalid
            NotFound: If the supplier or site does not exist
            DuplicateInvoiceNumber: If the supplier already has that number
        """
        missing = [field for field in REQUIRED_FIELDS if not str(fields.get(field) or '').strip()]
        if missing:
            raise ValueError(f"Complete the required fields: {', '.join(missing)}")
        if 'total' not in fields:
            raise ValueError("Enter a valid invoice total")

        fields.setdefault('status', 'pending')
        cls._coerce(fields)
        cls._check_references(fields['supplier_id'], fields['site_id'])

        DuplicateInvoiceNumberSpecification.check(fields['supplier_id'], fields['number'])

        invoice = Invoice.from_dict(fields)
        db.session.add(invoice)
        cls._commit(invoice)
        logger.info(f"Invoice created: {invoice.number} (ID: {invoice.id}, supplier {invoice.supplier_id})")
        return invoice

    @classmethod
    def update_invoice(cls, invoice_id: int, **updates) -> Invoice:
        """
        Update an invoice, re-checking the number against the supplier's other invoices.

        Raises:
            NotFound: If the invoice, supplier or site does not exist
            DuplicateInvoiceNumber: If the new number/supplier pair is taken
        """
        invoice = db.session.get(Invoice, invoice_id)
        if invoice is None:
            raise NotFound("Invoice", invoice_id)

        writable = Invoice.column_names() - set(Invoice.protected_fields)
        unknown = set(updates) - writable
        if unknown:
            raise ValueError(f"Unknown invoice fields: {', '.join(sorted(unknown))}")
        for field in REQUIRED_FIELDS:
            if field in updates and not str(updates[field] or '').strip():
                raise ValueError(f"Invoice {field} is required")

        cls._coerce(updates)
        cls._check_references(updates.get('supplier_id'), updates.get('site_id'))

        supplier_id = updates.get('supplier_id', invoice.supplier_id)
        number = updates.get('number', invoice.number)
        DuplicateInvoiceNumberSpecification.check(supplier_id, number, exclude_invoice_id=invoice.id)

        for field, value in updates.items():
            setattr(invoice, field, value)
        cls._commit(invoice)
        logger.info(f"Invoice updated: {invoice.number} (ID: {invoice.id})")
        return invoice
