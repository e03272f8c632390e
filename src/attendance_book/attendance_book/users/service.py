from __future__ import annotations

import logging
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import AuthEventKind
from ..core.exceptions import AuthenticationError, RecordNotFoundError, ValidationError
from .avatars import AvatarStorage, avatar_extension
from .events import AuthEvent, AuthEventBus, AuthListener
from .model import SessionUser
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: accounts (sign up, sign in/out, profile, avatar)."""

    def __init__(
        self,
        users: UserRepository,
        avatars: AvatarStorage,
        events: Optional[AuthEventBus] = None,
    ):
        self._users = users
        self._avatars = avatars
        self._events = events or AuthEventBus()

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def _emit(self, kind: AuthEventKind, user_id: Optional[int]) -> None:
        self._events.publish(AuthEvent(kind=kind, user_id=user_id))

    def sign_up(self, *, email: str, password: str, full_name: str) -> SessionUser:
        email = require_email(email)
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("Email is already registered")

        user_id = self._users.create_user(
            email=email,
            full_name=full_name,
            password_hash=generate_password_hash(password),
        )
        logger.info("Account %s registered", user_id)
        self._emit(AuthEventKind.SIGNED_UP, user_id)
        return self.current_user(user_id)

    def sign_in(self, email: str, password: str) -> SessionUser:
        account = self._users.get_by_email((email or "").strip().lower())
        if not account:
            raise AuthenticationError("Wrong email or password")

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            ok = False
        if not ok:
            raise AuthenticationError("Wrong email or password")

        self._emit(AuthEventKind.SIGNED_IN, account.user_id)
        return SessionUser.from_account(account)

    def current_user(self, user_id: Optional[int]) -> SessionUser:
        if not user_id:
            raise AuthenticationError("Not signed in")
        account = self._users.get_by_id(int(user_id))
        if not account:
            raise AuthenticationError("Session expired, sign in again")
        return SessionUser.from_account(account)

    def sign_out(self, user_id: Optional[int]) -> None:
        self._emit(AuthEventKind.SIGNED_OUT, user_id)

    def update_user(
        self,
        user_id: int,
        *,
        email: Optional[str] = None,
        password: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> SessionUser:
        """Change email/password/full name; blank values mean "keep"."""
        current = self.current_user(user_id)

        new_email = None
        if email and email.strip().lower() != current.email:
            new_email = require_email(email)
            if self._users.get_by_email(new_email):
                raise ValidationError("Email is already registered")

        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        new_name = full_name.strip() if full_name and full_name.strip() else None

        if not self._users.update_user(
            current.user_id,
            email=new_email,
            full_name=new_name,
            password_hash=password_hash,
        ):
            raise RecordNotFoundError("Account not found")

        self._emit(AuthEventKind.USER_UPDATED, current.user_id)
        return self.current_user(current.user_id)

    def upload_avatar(self, user_id: int, *, filename: str, content: bytes) -> str:
        """Store the image as `<user_id>.<ext>` and record its public URL on the account."""
        current = self.current_user(user_id)
        if not content:
            raise ValidationError("Avatar file is empty")

        url = self._avatars.save(f"{current.user_id}.{avatar_extension(filename)}", content)
        if not self._users.update_user(current.user_id, avatar_url=url):
            raise RecordNotFoundError("Account not found")

        logger.info("Avatar updated for account %s", current.user_id)
        self._emit(AuthEventKind.USER_UPDATED, current.user_id)
        return url
