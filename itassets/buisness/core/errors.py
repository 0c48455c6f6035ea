"""
Domain exceptions for asset code allocation

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business layer and mapped to HTTP responses by the
presentation layer. Field-level validation keeps using ValueError.
"""


class AssetCodeDomainError(Exception):
    """Base exception for all allocation domain errors"""
    pass


class NotFound(AssetCodeDomainError):
    """Raised when a referenced site, asset, supplier or invoice does not exist"""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class PrefixCollision(AssetCodeDomainError):
    """Raised when no unique 4-character prefix can be derived from a site name"""

    def __init__(self, message: str, prefix: str = None):
        self.prefix = prefix
        super().__init__(message)


class PrefixLockedError(AssetCodeDomainError):
    """Raised when an update tries to change a site's prefix or asset counter"""
    pass


class DuplicateInvoiceNumber(AssetCodeDomainError):
    """Raised when a supplier already has an invoice with the same normalized number"""

    def __init__(self, supplier_id, number: str):
        self.supplier_id = supplier_id
        self.number = number
        super().__init__(
            f"An invoice numbered '{number}' already exists for supplier {supplier_id}"
        )


class TransactionConflict(AssetCodeDomainError):
    """Raised when a storage transaction keeps conflicting after every retry attempt"""
    pass
