"""
Duplicate Invoice Number Specification

Prevents a supplier from having two invoices whose numbers only differ in
case or punctuation ("FE-1020" and "fe 1020" are the same invoice).

This is a read-only check performed before the write, outside any
transaction. Two simultaneous saves can both pass it; the unique constraint
on (supplier_id, number_normalized) rejects the loser at commit time.
"""

from typing import Optional
from itassets.data.finance.invoice import Invoice, normalize_invoice_number
from itassets.buisness.core.errors import DuplicateInvoiceNumber


class DuplicateInvoiceNumberSpecification:
    """
    Specification pattern for detecting duplicate supplier invoice numbers.
    """

    @classmethod
    def check(
        cls,
        supplier_id: int,
        number: str,
        exclude_invoice_id: Optional[int] = None
    ) -> None:
        """
        Raises:
            DuplicateInvoiceNumber: If the supplier already has that number
        """
        if cls.find_conflicts(supplier_id, number, exclude_invoice_id):
            raise DuplicateInvoiceNumber(supplier_id, number)

    @classmethod
    def find_conflicts(
        cls,
        supplier_id: int,
        number: str,
        exclude_invoice_id: Optional[int] = None
    ) -> list:
        """
        Find invoices of the same supplier whose normalized number matches.

        Returns:
            list: Conflicting Invoice objects
        """
        normalized = normalize_invoice_number(number)
        if not normalized:
            return []

        query = Invoice.query.filter(Invoice.supplier_id == supplier_id)
        if exclude_invoice_id is not None:
            query = query.filter(Invoice.id != exclude_invoice_id)

        return [
            invoice for invoice in query.all()
            if normalize_invoice_number(invoice.number) == normalized
        ]

    @classmethod
    def has_conflicts(
        cls,
        supplier_id: int,
        number: str,
        exclude_invoice_id: Optional[int] = None
    ) -> bool:
        return len(cls.find_conflicts(supplier_id, number, exclude_invoice_id)) > 0


def is_duplicate_invoice_number(supplier_id: int, number: str, excluding_id: Optional[int] = None) -> bool:
    """True if another invoice of ``supplier_id`` already carries ``number`` (normalized)"""
    return DuplicateInvoiceNumberSpecification.has_conflicts(supplier_id, number, excluding_id)
