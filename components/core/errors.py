"""Domain errors raised by the billing components."""


class BillingError(Exception):
    """Base class for billing errors."""


class ValidationError(BillingError):
    """Bad input shape or range; carries the offending field."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(BillingError):
    """Referenced record does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(BillingError):
    """Operation would break a reference held by other records."""


class TransientDeliveryError(BillingError):
    """Notification could not be delivered."""


class PersistenceError(BillingError):
    """Storage I/O failed; the current unit of work was rolled back."""
