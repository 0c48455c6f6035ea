"""
Finance models package: suppliers and their invoices
"""

from .supplier import Supplier
from .invoice import Invoice

__all__ = [
    'Supplier',
    'Invoice',
]
