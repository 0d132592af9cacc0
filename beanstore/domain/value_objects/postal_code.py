"""
Postal code value object

Japanese postal codes are seven digits, shown as NNN-NNNN.
"""

from dataclasses import dataclass

from beanstore.infrastructure.utilities.constants import PostalCodeSettings


def extract_digits(raw: str) -> str:
    """Keep only ASCII digits, capped at the postal code length"""
    digits = "".join(ch for ch in (raw or "") if "0" <= ch <= "9")
    return digits[: PostalCodeSettings.DIGITS]


def format_postal_code(raw: str, previous: str = "") -> str:
    """
    Format user input as NNN-NNNN.

    A hyphen follows the third digit while typing forward. When the input got
    shorter than the previous display value the user is deleting, so a
    trailing hyphen after exactly three digits is not re-added.
    """
    digits = extract_digits(raw)
    position = PostalCodeSettings.HYPHEN_POSITION
    deleting = len(raw or "") < len(previous or "")

    if len(digits) < position:
        return digits
    if len(digits) == position and deleting:
        return digits
    return digits[:position] + PostalCodeSettings.HYPHEN + digits[position:]


@dataclass(frozen=True)
class PostalCode:
    """Complete seven digit postal code"""

    digits: str

    def __post_init__(self):
        if (
            not isinstance(self.digits, str)
            or len(self.digits) != PostalCodeSettings.DIGITS
            or not self.digits.isdigit()
        ):
            raise ValueError("Postal code must be exactly 7 digits")

    @classmethod
    def from_input(cls, raw: str) -> "PostalCode":
        return cls(extract_digits(raw))

    @property
    def formatted(self) -> str:
        position = PostalCodeSettings.HYPHEN_POSITION
        return self.digits[:position] + PostalCodeSettings.HYPHEN + self.digits[position:]

    def __str__(self) -> str:
        return self.formatted
