"""
Ledger Exceptions

All failures are local and recoverable: the ledger validates before it
mutates, so a raised error always means "nothing changed, fix the input
and try again". Nothing is retried.
"""

from enum import Enum


class ValidationErrorCode(str, Enum):
    """Machine-readable reason a ledger input was rejected."""
    EMPTY_NAME = "empty_name"
    INVALID_PRICE = "invalid_price"
    NO_ASSIGNEES = "no_assignees"
    INVALID_TAX_RATE = "invalid_tax_rate"


class LedgerError(Exception):
    """Base class for all ledger errors."""
    pass


class LedgerValidationError(LedgerError):
    """
    Input failed validation.

    user_message is safe to show as-is in a notification.
    """

    code: ValidationErrorCode

    def __init__(self, user_message: str, field: str):
        super().__init__(user_message)
        self.user_message = user_message
        self.field = field


class EmptyNameError(LedgerValidationError):
    """Name is empty after trimming whitespace."""
    code = ValidationErrorCode.EMPTY_NAME


class InvalidPriceError(LedgerValidationError):
    """Price is not a positive finite number."""
    code = ValidationErrorCode.INVALID_PRICE


class NoAssigneesError(LedgerValidationError):
    """Item would have nobody to split it between."""
    code = ValidationErrorCode.NO_ASSIGNEES


class InvalidTaxRateError(LedgerValidationError):
    """Tax rate is not a finite number."""
    code = ValidationErrorCode.INVALID_TAX_RATE


class NotFoundError(LedgerError):
    """Target item does not exist."""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(f"{entity_type.capitalize()} not found: {entity_id}")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateIdError(LedgerError):
    """The id factory returned an id that was already issued."""

    def __init__(self, entity_id: str):
        super().__init__(f"Id already issued: {entity_id}")
        self.entity_id = entity_id


class InvalidIdError(LedgerError):
    """The id factory returned something that cannot be used as an id."""

    def __init__(self, entity_id: object):
        super().__init__(f"Unusable id: {entity_id!r}")
        self.entity_id = entity_id
