"""
Invoice Service
Presentation service for invoice listings.
"""

from typing import List, Optional
from itassets.data.finance.invoice import Invoice, normalize_invoice_number


class InvoiceService:

    @staticmethod
    def list_invoices(supplier_id: Optional[int] = None) -> List[Invoice]:
        query = Invoice.query
        if supplier_id is not None:
            query = query.filter(Invoice.supplier_id == supplier_id)
        return query.order_by(Invoice.created_at.desc()).all()

    @staticmethod
    def search_by_number(fragment: str, supplier_id: Optional[int] = None) -> List[Invoice]:
        """Invoices whose normalized number contains the normalized fragment"""
        needle = normalize_invoice_number(fragment)
        invoices = InvoiceService.list_invoices(supplier_id)
        if not needle:
            return invoices
        return [inv for inv in invoices if needle in normalize_invoice_number(inv.number)]
