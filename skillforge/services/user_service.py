"""
User administration: accounts and their credentials
"""
import logging
from typing import List, Optional

from skillforge.config import settings
from skillforge.errors import DuplicateEmail, NotFound, ValidationError
from skillforge.schemas.user import Identity, UserCreate, UserUpdate
from skillforge.services.store import Collection, Store, new_id, store, utcnow

logger = logging.getLogger(__name__)


def check_password(password: str, confirm: Optional[str] = None) -> None:
    if len(password or "") < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long.")
    if confirm is not None and password != confirm:
        raise ValidationError("Passwords do not match.")


class UserService:
    def __init__(self, store: Store):
        self.store = store

    def list_users(self) -> List[Identity]:
        return self.store.list_all(Collection.USERS)

    def get_user(self, user_id: str) -> Identity:
        user = self.store.get_by_id(Collection.USERS, user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def create_user(self, request: UserCreate) -> Identity:
        """
        Create an account and its credential

        Raises:
            ValidationError: password shorter than MIN_PASSWORD_LENGTH
            DuplicateEmail: a user already has the email
        """
        check_password(request.password)
        email = str(request.email)
        if self.store.find_user_by_email(email) is not None:
            raise DuplicateEmail("User with this email already exists.")

        user = Identity(
            id=new_id("user"),
            email=email,
            name=request.name,
            role=request.role,
            created_at=utcnow(),
        )
        self.store.create(Collection.USERS, user)
        self.store.set_credential(email, request.password)
        logger.info(f"User created: {user.id} ({user.role.value})")
        return user

    def update_user(self, user_id: str, request: UserUpdate) -> Identity:
        """Apply an admin edit; a changed email carries the credential with it"""
        current = self.get_user(user_id)
        changes = request.model_dump(exclude_none=True)
        if "email" in changes:
            changes["email"] = str(changes["email"])

        new_email = changes.get("email", current.email)
        if new_email != current.email:
            other = self.store.find_user_by_email(new_email)
            if other is not None and other.id != user_id:
                raise DuplicateEmail("User with this email already exists.")

        updated = current.model_copy(update=changes)
        self.store.update(Collection.USERS, updated)

        if new_email != current.email:
            secret = self.store.get_credential(current.email)
            self.store.delete_credential(current.email)
            if secret is not None:
                self.store.set_credential(new_email, secret)

        logger.info(f"User updated: {user_id}")
        return updated

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        self.store.delete(Collection.USERS, user_id)
        self.store.delete_credential(user.email)
        logger.info(f"User deleted: {user_id}")

    def reset_password(self, user_id: str, new_password: str, confirm_password: str) -> None:
        check_password(new_password, confirm_password)
        user = self.get_user(user_id)
        self.store.set_credential(user.email, new_password)
        logger.info(f"Password reset for {user_id}")


# Global instance
user_service = UserService(store)
