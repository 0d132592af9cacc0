"""Payment client secret value object"""

from dataclasses import dataclass

from beanstore.infrastructure.utilities.constants import PaymentSettings


@dataclass(frozen=True)
class ClientSecret:
    """Opaque token identifying one payment attempt (pi_<id>_secret_<token>)"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Client secret cannot be empty")

    @property
    def payment_intent_id(self) -> str:
        """The payment intent id is the part before the secret separator"""
        return self.value.split(PaymentSettings.CLIENT_SECRET_SEPARATOR)[0]

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ClientSecret({self.payment_intent_id}_secret_***)"
