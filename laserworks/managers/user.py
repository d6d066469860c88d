"""User accounts: registration, authentication and profile changes."""
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from ..auth import PasswordHasher
from ..errors import BadRequestError, NotFoundError, UnauthorizedError
from ..models import RoleEnum, User
from ..repositories import UserRepository
from ..sql import sql_for_partial_update, to_columns

logger = logging.getLogger(__name__)

# "password" is already the column name and falls through unmapped.
USER_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "birthDate": "birth_date",
    "isActive": "is_active",
}


class UserManager:
    def __init__(self, db: Session, hasher: PasswordHasher):
        self.users = UserRepository(db)
        self.hasher = hasher

    def authenticate(self, username: str, password: str) -> User:
        """Return the user for valid credentials.

        Unknown usernames and wrong passwords fail identically.
        """
        user = self.users.get(username)
        if user is not None and self.hasher.verify(password, user.password):
            return user
        raise UnauthorizedError("Invalid username/password")

    def register(self, data: Mapping[str, Any]) -> User:
        username = data.get("username")
        if not username or not data.get("password"):
            raise BadRequestError("Username and password are required")
        if self.users.get(username) is not None:
            raise BadRequestError(f"Duplicate username: {username}")

        fields = to_columns(data, USER_FIELDS)
        fields["password"] = self.hasher.hash(data["password"])
        fields["role"] = RoleEnum(data.get("role") or RoleEnum.REGULAR)
        fields["is_active"] = True
        fields["is_verified"] = False
        user = self.users.insert(fields)
        logger.info("Registered user %s", username)
        return user

    def get_user(self, username: str) -> User:
        user = self.users.get(username)
        if user is None:
            raise NotFoundError(f"No user: {username}")
        return user

    def list_users(self) -> List[User]:
        return self.users.list()

    def update(self, username: str, data: Mapping[str, Any]) -> User:
        """Partially update a user.

        A ``password`` in the payload is the user's current password and must
        match before anything is written. It is replaced by the hash of
        ``newPassword`` when one is given, otherwise dropped.
        """
        changes: Dict[str, Any] = dict(data)
        if "username" in changes:
            raise BadRequestError("Username cannot be changed")
        new_password = changes.pop("newPassword", None)

        if "password" in changes:
            user = self.get_user(username)
            if not self.hasher.verify(changes["password"] or "", user.password):
                raise UnauthorizedError("Invalid password")
            if new_password:
                changes["password"] = self.hasher.hash(new_password)
            else:
                del changes["password"]
                if not changes:
                    return user
        elif new_password:
            raise BadRequestError("Current password is required to set a new password")

        user = self.users.update_by_key(username, sql_for_partial_update(changes, USER_FIELDS))
        if user is None:
            raise NotFoundError(f"No user: {username}")
        if new_password:
            logger.info("Password changed for user %s", username)
        return user

    def _set_flag(self, username: str, **values: Any) -> User:
        user = self.users.set_values(username, **values)
        if user is None:
            raise NotFoundError(f"No user found with username: {username}")
        logger.info("User %s updated: %s", username, values)
        return user

    def verify_user(self, username: str) -> User:
        return self._set_flag(username, is_verified=True)

    def activate(self, username: str) -> User:
        return self._set_flag(username, is_active=True)

    def deactivate(self, username: str) -> User:
        return self._set_flag(username, is_active=False)

    def remove(self, username: str) -> None:
        if self.users.delete_by_key(username) is None:
            raise NotFoundError(f"No user found with username: {username}")
        logger.info("Deleted user %s", username)
