"""
EmailAddress Value Object
"""

import re
from dataclasses import dataclass

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")


@dataclass(frozen=True)
class EmailAddress:
    """
    Validated email address.

    Surrounding whitespace is trimmed; case is preserved. Equality and
    hashing use the trimmed value.
    """

    value: str

    def __post_init__(self):
        if self.value is None or not str(self.value).strip():
            raise ValueError("Email cannot be null or empty")

        trimmed = str(self.value).strip()
        if not _EMAIL_PATTERN.match(trimmed):
            raise ValueError(f"Invalid email format: {self.value}")
        object.__setattr__(self, "value", trimmed)

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]

    def __str__(self) -> str:
        return self.value
