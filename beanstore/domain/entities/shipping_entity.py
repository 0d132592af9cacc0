"""
Shipping Entity - recipient and address details sent with a payment
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from beanstore.infrastructure.utilities.constants import PaymentSettings


@dataclass
class ShippingDetails:
    """Shipping form state"""

    name: str = ""
    phone: str = ""
    postal_code: str = ""
    prefecture: str = ""
    city: str = ""
    line1: str = ""
    line2: str = ""
    country: str = PaymentSettings.DEFAULT_COUNTRY
    errors: Dict[str, str] = field(default_factory=dict)

    def to_payment_shipping(self) -> Dict[str, Any]:
        """Shipping block in the shape the payment provider expects"""
        return {
            "name": self.name.strip(),
            "phone": self.phone.strip(),
            "address": {
                "country": self.country,
                "postal_code": self.postal_code,
                "state": self.prefecture,
                "city": self.city,
                "line1": self.line1.strip(),
                "line2": self.line2.strip(),
            },
        }
