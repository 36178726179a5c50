"""
Custom exceptions for the Drug Supply Chain API.
Provides specific error types for each way a lifecycle request can fail.
"""


class SupplyChainException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(SupplyChainException):
    """Raised when request data validation fails."""
    pass


class UnauthorizedException(SupplyChainException):
    """Raised when the caller's role may not perform a transition."""
    pass


class DrugAlreadyExistsException(SupplyChainException):
    """Raised when registering a drug id that is already on record."""
    pass


class DrugNotFoundException(SupplyChainException):
    """Raised when a drug is not found in the asset store."""
    pass


class InvalidStateException(SupplyChainException):
    """Raised when a transition is not legal from the drug's current state."""
    pass


class StoreException(SupplyChainException):
    """Raised when an asset store operation fails."""
    pass


class WriteConflictException(StoreException):
    """
    Raised when a conditional write loses to a concurrent update.
    The whole operation may be retried from a fresh read.
    """
    pass


class EncodingException(SupplyChainException):
    """Raised when a drug record cannot be serialized or deserialized."""
    pass
