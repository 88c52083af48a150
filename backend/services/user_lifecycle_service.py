"""
User Lifecycle Service

Domain service for registration, authentication and account administration.

Rules enforced here:
- email addresses are unique across all users
- first and last names are required and 2-50 characters long
- new accounts start inactive and unverified
- only ADMIN or MANAGER users may change roles, and never their own
- nobody can deactivate their own account
- activation, deactivation and email verification each refuse to repeat

``active`` and ``email_verified`` are independent flags; any combination of
the two is a valid state.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Union

from config.catalog_config import CatalogSettings, get_settings
from constants import NAME_MAX_LENGTH, NAME_MIN_LENGTH
from domain.aggregates import User
from domain.value_objects import EmailAddress, HashedPassword, Role
from dtos.response import UserStatistics
from exceptions import (
    AlreadyActiveError,
    AlreadyInactiveError,
    AlreadyVerifiedError,
    CannotActOnSelfError,
    DuplicateEmailError,
    ForbiddenError,
    InactiveAccountError,
    InvalidCredentialError,
    InvalidFieldError,
    MissingFieldError,
    NotFoundError,
    SamePasswordError,
)
from repositories.interfaces import IUserRepository
from repositories.user_specifications import VerifiedEmailSpec
from utils.clock import Clock, utc_now
from utils.logging_utils import log_operation

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = (
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("email", "Email"),
    ("password", "Password"),
    ("role", "Role"),
)


class UserLifecycleService:
    """Registers, authenticates and administers user accounts."""

    def __init__(
        self,
        user_repository: IUserRepository,
        clock: Clock = utc_now,
        settings: Optional[CatalogSettings] = None
    ):
        """
        Initialize UserLifecycleService.

        Args:
            user_repository: User storage port
            clock: Source of timestamps
            settings: Runtime settings; defaults to the process settings
        """
        self.users = user_repository
        self.clock = clock
        self.settings = settings or get_settings()

    # ==================== COMMANDS ====================

    @log_operation("register_user")
    def register_user(self, candidate: User) -> User:
        """
        Register a new user.

        The account always starts inactive and unverified, whatever the
        candidate says.

        Args:
            candidate: User to register; the caller's object is left untouched

        Returns:
            The stored user with generated ID and timestamps

        Raises:
            MissingFieldError: For the first absent required field
            InvalidFieldError: If a name is outside the allowed length
            DuplicateEmailError: If the email is already registered
        """
        logger.debug(f"Registering new user: {candidate.email}")

        candidate = replace(candidate)
        self._validate_required(candidate)
        if self.users.exists_by_email(candidate.email):
            raise DuplicateEmailError(candidate.email.value)

        candidate.id = None
        candidate.version = 0
        candidate.last_login_at = None
        candidate.stamp_registered(self.clock())

        saved = self.users.save(candidate)
        logger.info(f"Successfully registered user with ID: {saved.id}")
        return saved

    @log_operation("authenticate_user")
    def authenticate_user(self, email: Union[EmailAddress, str], plaintext_password: str) -> User:
        """
        Check credentials and record the login.

        Args:
            email: The user's email
            plaintext_password: The password as typed

        Returns:
            The authenticated user with last_login_at updated

        Raises:
            NotFoundError: If no user has this email
            InactiveAccountError: If the account is inactive
            InvalidCredentialError: If the password does not match
        """
        address = self._coerce_email(email)
        logger.debug(f"Authenticating user: {address}")

        user = self._load_by_email(address)
        if not user.active:
            raise InactiveAccountError(user.id)
        if not user.password.matches(plaintext_password):
            raise InvalidCredentialError(user.id)

        user.update_last_login(self.clock())
        saved = self.users.save(user)

        logger.info(f"Successfully authenticated user: {address}")
        return saved

    @log_operation("update_user")
    def update_user(self, user_id: str, candidate: User, acting_user: User) -> User:
        """
        Apply a candidate's profile, email, role and password to a stored user.

        The stored id, creation time, activity and verification flags and last
        login are kept; those change only through their own operations.

        Args:
            user_id: ID of the user to update
            candidate: New user data; the caller's object is left untouched
            acting_user: User performing the update

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            MissingFieldError / InvalidFieldError: If the candidate is incomplete
            DuplicateEmailError: If the new email belongs to another user
            ForbiddenError: If the role changes and acting_user is not an admin
        """
        logger.debug(f"Updating user with ID: {user_id}")

        existing = self._load(user_id)
        candidate = replace(candidate)
        self._validate_required(candidate)

        if candidate.email != existing.email:
            other = self.users.find_by_email(candidate.email)
            if other is not None and other.id != existing.id:
                raise DuplicateEmailError(candidate.email.value)

        if candidate.role != existing.role:
            self._require_admin(acting_user, "change user roles")

        now = self.clock()
        existing.update_profile(candidate.first_name, candidate.last_name, now)
        if candidate.email != existing.email:
            existing.change_email(candidate.email, now)
        if candidate.role != existing.role:
            existing.change_role(candidate.role, now)
        if candidate.password != existing.password:
            existing.change_password(candidate.password, now)

        saved = self.users.save(existing)
        logger.info(f"Successfully updated user with ID: {saved.id}")
        return saved

    @log_operation("change_password")
    def change_password(self, user_id: str, current_plaintext: str, new_plaintext: str) -> User:
        """
        Replace a user's password after checking the current one.

        Args:
            user_id: ID of the user
            current_plaintext: The password in use now
            new_plaintext: The replacement; at least 8 characters

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            InvalidCredentialError: If current_plaintext does not match
            SamePasswordError: If the new password equals the current one
            MissingFieldError / InvalidFieldError: If the new password is absent or too short
        """
        logger.debug(f"Changing password for user ID: {user_id}")

        user = self._load(user_id)
        if not user.password.matches(current_plaintext):
            raise InvalidCredentialError(user.id, "Current password is incorrect")
        if new_plaintext is None or not new_plaintext.strip():
            raise MissingFieldError("User", "new_password", "New password")
        if new_plaintext == current_plaintext:
            raise SamePasswordError(user.id)

        try:
            new_password = HashedPassword.from_plaintext(new_plaintext)
        except ValueError as e:
            raise InvalidFieldError("User", "new_password", str(e)) from e

        user.change_password(new_password, self.clock())
        saved = self.users.save(user)

        logger.info(f"Password changed for user: {user.email}")
        return saved

    @log_operation("change_role")
    def change_role(self, user_id: str, new_role: Union[Role, str], acting_user: User) -> User:
        """
        Give a user a different role.

        Args:
            user_id: ID of the user
            new_role: The role to assign
            acting_user: User making the change; must be ADMIN or MANAGER

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If acting_user is not an admin
            CannotActOnSelfError: If acting_user targets their own account
            InvalidFieldError: If new_role is not a known role
        """
        logger.debug(f"Changing role for user ID: {user_id} to role: {new_role}")

        user = self._load(user_id)
        self._require_admin(acting_user, "change user roles")
        if user.id == acting_user.id:
            raise CannotActOnSelfError("change the role", user.id)

        try:
            role = Role.from_string(new_role)
        except ValueError as e:
            raise InvalidFieldError("User", "role", str(e), new_role) from e

        old_role = user.role
        user.change_role(role, self.clock())
        saved = self.users.save(user)

        logger.info(f"Role changed for user {user.email}: {old_role} -> {role}")
        return saved

    @log_operation("activate_user")
    def activate_user(self, user_id: str) -> User:
        """
        Raises:
            NotFoundError: If the user does not exist
            AlreadyActiveError: If the account is already active
        """
        logger.debug(f"Activating user with ID: {user_id}")

        user = self._load(user_id)
        if user.active:
            raise AlreadyActiveError(user.id)

        user.activate(self.clock())
        saved = self.users.save(user)
        logger.info(f"User activated: {user.email}")
        return saved

    @log_operation("deactivate_user")
    def deactivate_user(self, user_id: str, acting_user: User) -> User:
        """
        Raises:
            NotFoundError: If the user does not exist
            AlreadyInactiveError: If the account is already inactive
            CannotActOnSelfError: If acting_user targets their own account
        """
        logger.debug(f"Deactivating user with ID: {user_id}")

        user = self._load(user_id)
        if not user.active:
            raise AlreadyInactiveError(user.id)
        if acting_user is None:
            raise MissingFieldError("User", "acting_user", "Acting user")
        if user.id == acting_user.id:
            raise CannotActOnSelfError("deactivate", user.id)

        user.deactivate(self.clock())
        saved = self.users.save(user)
        logger.info(f"User deactivated: {user.email}")
        return saved

    @log_operation("verify_email")
    def verify_email(self, user_id: str) -> User:
        """
        Raises:
            NotFoundError: If the user does not exist
            AlreadyVerifiedError: If the email is already verified
        """
        logger.debug(f"Verifying email for user ID: {user_id}")

        user = self._load(user_id)
        if user.email_verified:
            raise AlreadyVerifiedError(user.id)

        user.verify_email(self.clock())
        saved = self.users.save(user)
        logger.info(f"Email verified for user: {user.email}")
        return saved

    # ==================== QUERIES ====================

    def find_user_by_id(self, user_id: str) -> User:
        return self._load(user_id)

    def find_user_by_email(self, email: Union[EmailAddress, str]) -> User:
        return self._load_by_email(self._coerce_email(email))

    def find_all_users(self, page: int = 0, page_size: Optional[int] = None) -> List[User]:
        return self.users.find_all(page, page_size or self.settings.default_page_size)

    def find_users_by_role(self, role: Union[Role, str], page: int = 0, page_size: Optional[int] = None) -> List[User]:
        try:
            role = Role.from_string(role)
        except ValueError as e:
            raise InvalidFieldError("User", "role", str(e), role) from e
        return self.users.find_by_role(role, page, page_size or self.settings.default_page_size)

    def find_active_users(self, page: int = 0, page_size: Optional[int] = None) -> List[User]:
        return self.users.find_active_users(page, page_size or self.settings.default_page_size)

    def search_users_by_name(self, name: str, page: int = 0, page_size: Optional[int] = None) -> List[User]:
        if not name or not name.strip():
            return self.find_all_users(page, page_size)
        return self.users.search_by_name(name, page, page_size or self.settings.default_page_size)

    def get_user_statistics(self) -> UserStatistics:
        return UserStatistics(
            total_users=self.users.count(),
            active_users=self.users.count_active_users(),
            inactive_users=self.users.count_inactive_users(),
            verified_users=self.users.count_matching(VerifiedEmailSpec()),
            customer_users=self.users.count_by_role(Role.CUSTOMER),
            admin_users=self.users.count_by_role(Role.ADMIN),
            manager_users=self.users.count_by_role(Role.MANAGER),
        )

    # ==================== VALIDATION ====================

    def _load(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", "ID", user_id)
        return user

    def _load_by_email(self, email: EmailAddress) -> User:
        user = self.users.find_by_email(email)
        if user is None:
            raise NotFoundError("User", "email", email)
        return user

    @staticmethod
    def _coerce_email(email: Union[EmailAddress, str]) -> EmailAddress:
        if isinstance(email, EmailAddress):
            return email
        if email is None or not str(email).strip():
            raise MissingFieldError("User", "email", "Email")
        try:
            return EmailAddress(email)
        except ValueError as e:
            raise InvalidFieldError("User", "email", str(e), email) from e

    def _validate_required(self, user: User) -> None:
        for field, label in _REQUIRED_FIELDS:
            value = getattr(user, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingFieldError("User", field, label)

        user.email = self._coerce_email(user.email)
        if not isinstance(user.password, HashedPassword):
            raise InvalidFieldError("User", "password", "Password must be hashed before it reaches the domain")
        try:
            user.role = Role.from_string(user.role)
        except ValueError as e:
            raise InvalidFieldError("User", "role", str(e), user.role) from e

        for field, label in _REQUIRED_FIELDS[:2]:
            value = getattr(user, field).strip()
            if not NAME_MIN_LENGTH <= len(value) <= NAME_MAX_LENGTH:
                raise InvalidFieldError(
                    "User",
                    field,
                    f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
                    value,
                )
            setattr(user, field, value)

    @staticmethod
    def _require_admin(acting_user: Optional[User], action: str) -> None:
        if acting_user is None or not acting_user.can_perform_admin_operations():
            raise ForbiddenError(
                action,
                getattr(acting_user, "id", None),
                str(acting_user.role) if acting_user is not None else "ANONYMOUS",
            )
