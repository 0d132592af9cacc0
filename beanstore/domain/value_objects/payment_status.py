"""Payment intent status value object"""

from enum import Enum


class PaymentIntentStatus(str, Enum):
    """Closed set of payment intent statuses the storefront acts on"""

    SUCCEEDED = "succeeded"
    PROCESSING = "processing"
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    OTHER = "other"

    @classmethod
    def from_raw(cls, raw: str | None) -> "PaymentIntentStatus":
        """Map a provider status string; anything unrecognised becomes OTHER"""
        if raw == cls.OTHER.value:
            return cls.OTHER
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER

    @property
    def is_terminal(self) -> bool:
        return self is not PaymentIntentStatus.PROCESSING
