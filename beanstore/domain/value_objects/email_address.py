"""Email address value object"""

import re
from dataclasses import dataclass

from beanstore.infrastructure.utilities.constants import AuthSettings

_EMAIL_RE = re.compile(AuthSettings.EMAIL_PATTERN)


@dataclass(frozen=True)
class EmailAddress:
    """Email address used for passwordless sign-in"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValueError("Email address must be a string")
        cleaned = self.value.strip()
        if not _EMAIL_RE.match(cleaned):
            raise ValueError(f"Invalid email address: {self.value!r}")
        object.__setattr__(self, "value", cleaned)

    def __str__(self) -> str:
        return self.value
