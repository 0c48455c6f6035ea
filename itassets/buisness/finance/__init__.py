"""
Finance business layer: invoice number deduplication and invoice save paths.
"""

from itassets.buisness.finance.invoice_policies import (
    DuplicateInvoiceNumberSpecification,
    is_duplicate_invoice_number,
)
from itassets.buisness.finance.invoice_manager import InvoiceManager

__all__ = [
    'DuplicateInvoiceNumberSpecification',
    'is_duplicate_invoice_number',
    'InvoiceManager',
]
