# finances/services/users.py
"""
User accounts: registration, sign-in check, profile, and cascading delete.

delete_user_cascade() is the only operation touching two tables: the user row
and every report it owns go in one transaction, or nothing goes.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, or_, select

from finances.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    StorageError,
)
from finances.models import Report, User, utcnow
from finances.schemas import RegisterIn, UserPatch
from finances.security import hash_password, verify_password

logger = logging.getLogger("finances.users")


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    def __init__(self, session: Session):
        self.session = session

    # ------------ lookups ------------

    def _find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def _find_by_username(self, username: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.username == username)).first()

    def get_profile(self, user_id: int) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # ------------ registration / sign-in ------------

    def register(self, data: RegisterIn) -> User:
        if data.password != data.confirm_password:
            raise InvalidInputError("Passwords do not match")

        email = normalize_email(data.email)
        username = data.username.strip()
        stmt = select(User).where(or_(User.email == email, User.username == username))
        if self.session.exec(stmt).first() is not None:
            raise ConflictError("Email or username already exists")

        user = User(
            email=email,
            username=username,
            fullname=data.fullname.strip(),
            hashed_password=hash_password(data.password),
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("user %s registered", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self._find_by_email(normalize_email(email))
        if not user or not verify_password(password, user.hashed_password):
            raise InvalidInputError("Invalid email or password.")
        return user

    # ------------ profile update ------------

    def update_profile(self, user_id: int, patch: UserPatch) -> User:
        """
        Apply only the fields present in the payload.
        email/username/password may be sent or left out, but not sent as null.
        """
        fields = patch.model_fields_set
        for name in ("email", "username", "password"):
            if name in fields and getattr(patch, name) is None:
                raise InvalidInputError(f"{name} cannot be null")

        if "password" in fields and patch.password != patch.confirm_password:
            raise InvalidInputError("Passwords do not match")

        user = self.get_profile(user_id)

        if "email" in fields:
            email = normalize_email(patch.email)
            existing = self._find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ConflictError("Email is already in use")
            user.email = email

        if "username" in fields:
            username = patch.username.strip()
            existing = self._find_by_username(username)
            if existing is not None and existing.id != user.id:
                raise ConflictError("Username is already in use")
            user.username = username

        if "fullname" in fields:
            user.fullname = (patch.fullname or "").strip()

        if "password" in fields:
            user.hashed_password = hash_password(patch.password)

        user.updated_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    # ------------ cascading delete ------------

    def _delete_reports_of(self, user_id: int) -> int:
        result = self.session.execute(delete(Report).where(Report.user_id == user_id))
        return result.rowcount or 0

    def _delete_user_row(self, user: User) -> None:
        self.session.delete(user)
        # flush now so a failing user delete surfaces inside the transaction
        self.session.flush()

    def _cascade(self, user_id: int) -> int:
        user = self.get_profile(user_id)
        # reports go first: report.user_id references user.id
        deleted = self._delete_reports_of(user_id)
        self._delete_user_row(user)
        return deleted

    def delete_user_cascade(self, user_id: int) -> int:
        """
        Delete the user and all of their reports atomically.

        Returns how many reports went with the user (0 is fine).
        Raises StorageError if any write fails; in that case both tables are
        left exactly as they were.

        A session that already has a transaction open (e.g. it read the
        profile first) is committed or rolled back here instead of begun.
        """
        try:
            if self.session.in_transaction():
                try:
                    deleted = self._cascade(user_id)
                    self.session.commit()
                except Exception:
                    self.session.rollback()
                    raise
            else:
                # begin() commits on success, rolls back on any exception
                with self.session.begin():
                    deleted = self._cascade(user_id)
        except SQLAlchemyError as exc:
            logger.warning("cascade delete of user %s rolled back: %s", user_id, exc)
            raise StorageError("Could not delete user and reports") from exc

        logger.info("user %s deleted with %d report(s)", user_id, deleted)
        return deleted
