"""
User Request DTOs

Commands carrying primitive user input. Plaintext passwords are hashed here,
at the edge, so that the domain only ever sees HashedPassword.
"""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr

from domain.aggregates import User
from domain.value_objects import EmailAddress, HashedPassword, Role


class RegisterUserCommand(BaseModel):
    """
    Command for registering a user.
    """

    first_name: str = Field(description="Given name, 2-50 characters")
    last_name: str = Field(description="Family name, 2-50 characters")
    email: str = Field(description="Email address, unique across users")
    password: SecretStr = Field(description="Plaintext password, at least 8 characters")
    role: str = Field("CUSTOMER", description="CUSTOMER, ADMIN or MANAGER")

    def to_candidate(self) -> User:
        """
        Build the candidate user.

        Raises:
            ValueError: If the email, password or role is malformed
        """
        return User(
            first_name=self.first_name,
            last_name=self.last_name,
            email=EmailAddress(self.email),
            password=HashedPassword.from_plaintext(self.password.get_secret_value()),
            role=Role.from_string(self.role),
        )


class UpdateUserCommand(BaseModel):
    """
    Command for updating a user's profile.

    Omitted fields keep the stored value.
    """

    first_name: Optional[str] = Field(None, description="New given name")
    last_name: Optional[str] = Field(None, description="New family name")
    email: Optional[str] = Field(None, description="New email address")
    role: Optional[str] = Field(None, description="New role; admin only")

    def to_candidate(self, existing: User) -> User:
        """
        Merge the command onto the stored user.

        Args:
            existing: The user as currently stored

        Raises:
            ValueError: If the email or role is malformed
        """
        return User(
            first_name=self.first_name if self.first_name is not None else existing.first_name,
            last_name=self.last_name if self.last_name is not None else existing.last_name,
            email=EmailAddress(self.email) if self.email is not None else existing.email,
            password=existing.password,
            role=Role.from_string(self.role) if self.role is not None else existing.role,
            id=existing.id,
        )


class ChangePasswordCommand(BaseModel):
    """Command for changing a password."""

    current_password: SecretStr = Field(description="Password in use now")
    new_password: SecretStr = Field(description="Replacement password")

