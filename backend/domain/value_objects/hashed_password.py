"""
HashedPassword Value Object

Holds a one-way password hash. The plaintext is never stored and the hash is
never rendered by str() or repr().
"""

from dataclasses import dataclass, field

from constants import PASSWORD_MIN_LENGTH, REDACTED_PLACEHOLDER
from utils.security import hash_password, verify_password


@dataclass(frozen=True)
class HashedPassword:
    """
    Immutable password hash.

    Two construction paths:
    - from_hash(): wrap a hash loaded from storage
    - from_plaintext(): hash a new password with a fresh random salt
    """

    hash: str = field(repr=False)

    def __post_init__(self):
        if self.hash is None or not str(self.hash).strip():
            raise ValueError("Hashed password value cannot be null or empty")

    @classmethod
    def from_hash(cls, hashed_value: str) -> "HashedPassword":
        """Wrap an already-hashed value, e.g. one loaded from the database."""
        return cls(hash=hashed_value)

    @classmethod
    def from_plaintext(cls, plaintext: str) -> "HashedPassword":
        """
        Hash a plaintext password.

        Args:
            plaintext: Password of at least 8 characters

        Returns:
            HashedPassword with a bcrypt hash

        Raises:
            ValueError: If the plaintext is empty or too short
        """
        if plaintext is None or not plaintext.strip():
            raise ValueError("Plain text password cannot be null or empty")
        if len(plaintext) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
        return cls(hash=hash_password(plaintext))

    def matches(self, plaintext: str | None) -> bool:
        """Check a plaintext candidate against the stored hash."""
        if plaintext is None:
            return False
        return verify_password(plaintext, self.hash)

    def __str__(self) -> str:
        return REDACTED_PLACEHOLDER

    def __repr__(self) -> str:
        return f"HashedPassword({REDACTED_PLACEHOLDER})"
