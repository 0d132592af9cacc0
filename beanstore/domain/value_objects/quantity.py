"""Cart quantity value object"""

from dataclasses import dataclass

from beanstore.infrastructure.utilities.constants import CartSettings


@dataclass(frozen=True)
class Quantity:
    """Line item quantity bounded by the cart maximum"""

    value: int
    maximum: int = CartSettings.MAX_QUANTITY

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Quantity must be an integer")
        if self.value < CartSettings.MIN_QUANTITY:
            raise ValueError("Quantity must be at least 1")
        if self.value > self.maximum:
            raise ValueError(f"Quantity cannot exceed {self.maximum}")

    @classmethod
    def is_valid(cls, value: int, maximum: int = CartSettings.MAX_QUANTITY) -> bool:
        try:
            cls(value, maximum)
        except ValueError:
            return False
        return True

    def __int__(self) -> int:
        return self.value
