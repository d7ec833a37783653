class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""


class AuthenticationError(DomainError):
    """Raised when a device presents a wrong or missing token."""


class NotFoundError(DomainError):
    """Raised when a card or person cannot be resolved."""


class CardNotRegistered(NotFoundError):
    """No active binding exists for the scanned card."""

    def __init__(self, card_number: str):
        super().__init__("Card not registered")
        self.card_number = card_number


class PersonNotFound(NotFoundError):
    """A card binding points at a person row that does not exist."""

    def __init__(self, label: str):
        super().__init__(f"{label} not found")


class LoggingFailure(DomainError):
    """Raised when a punch event could not be appended to the punch log.

    Never surfaced to the caller: the punch logger reports it and moves on.
    """


class StoreError(DomainError):
    """Raised when attendance data cannot be read or written. Safe to retry."""


class DeadlineExceeded(StoreError):
    """Raised when a request runs past its processing deadline."""
