"""User aggregate.

``active`` and ``email_verified`` are two independent flags. A user can be
active but unverified, verified but inactive, and so on; the service guards
each toggle separately.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from domain.value_objects import EmailAddress, HashedPassword, Role
from utils.clock import utc_now


@dataclass
class User:
    """A registered user account."""

    first_name: Optional[str]
    last_name: Optional[str]
    email: Optional[EmailAddress]
    password: Optional[HashedPassword]
    role: Optional[Role] = Role.CUSTOMER
    active: bool = False
    email_verified: bool = False
    last_login_at: Optional[datetime] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def can_perform_admin_operations(self) -> bool:
        return self.role is not None and self.role.is_admin_privileged()

    def can_perform_customer_operations(self) -> bool:
        return self.role is not None and self.role.is_customer()

    def stamp_registered(self, now: Optional[datetime] = None) -> None:
        """Reset to the initial inactive, unverified state."""
        now = now or utc_now()
        self.active = False
        self.email_verified = False
        self.created_at = now
        self.updated_at = now

    def activate(self, now: Optional[datetime] = None) -> None:
        self.active = True
        self.updated_at = now or utc_now()

    def deactivate(self, now: Optional[datetime] = None) -> None:
        self.active = False
        self.updated_at = now or utc_now()

    def verify_email(self, now: Optional[datetime] = None) -> None:
        self.email_verified = True
        self.updated_at = now or utc_now()

    def update_last_login(self, now: Optional[datetime] = None) -> None:
        now = now or utc_now()
        self.last_login_at = now
        self.updated_at = now

    def change_password(self, password: HashedPassword, now: Optional[datetime] = None) -> None:
        self.password = password
        self.updated_at = now or utc_now()

    def change_role(self, role: Role, now: Optional[datetime] = None) -> None:
        self.role = role
        self.updated_at = now or utc_now()

    def change_email(self, email: EmailAddress, now: Optional[datetime] = None) -> None:
        self.email = email
        self.updated_at = now or utc_now()

    def update_profile(self, first_name: Optional[str], last_name: Optional[str], now: Optional[datetime] = None) -> None:
        """Replace the non-blank names given; blank or missing ones are left alone."""
        if first_name is not None and first_name.strip():
            self.first_name = first_name.strip()
        if last_name is not None and last_name.strip():
            self.last_name = last_name.strip()
        self.updated_at = now or utc_now()
