"""Password hashing and the signed tokens used for auth and e-mail confirmation."""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from .config import Settings
from .models import RoleEnum


class Identity(BaseModel):
    """Who is making the request, as carried by a verified auth token."""

    username: str
    role: RoleEnum = RoleEnum.REGULAR
    is_verified: bool = False
    issued_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == RoleEnum.ADMIN


class PasswordHasher:
    def __init__(self, settings: Settings):
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=settings.password_hash_rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        return self._context.verify(plain_password, hashed_password)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Signs identities into bearer tokens and reads them back.

    Only ``username``, ``role`` and ``isVerified`` are embedded, together with
    the issue time and, when ``access_token_expire_minutes`` is positive, an
    expiry. ``decode`` never raises: anything that is not a valid, unexpired
    token signed with our secret decodes to ``None``.
    """

    def __init__(self, settings: Settings):
        self._secret = settings.secret_key
        self._algorithm = settings.jwt_algorithm
        self._expire_minutes = settings.access_token_expire_minutes

    def encode(self, user: Any) -> str:
        issued_at = _now()
        role = getattr(user, "role", None) or RoleEnum.REGULAR
        claims: Dict[str, Any] = {
            "username": user.username,
            "role": RoleEnum(role).value,
            "isVerified": bool(getattr(user, "is_verified", False)),
            "iat": int(issued_at.timestamp()),
        }
        if self._expire_minutes > 0:
            claims["exp"] = int((issued_at + timedelta(minutes=self._expire_minutes)).timestamp())
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Optional[Identity]:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
            issued_at = payload.get("iat")
            return Identity(
                username=payload["username"],
                role=payload.get("role") or RoleEnum.REGULAR,
                is_verified=payload.get("isVerified", False),
                issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc) if issued_at is not None else None,
            )
        except (JWTError, KeyError, TypeError, ValueError):
            return None


class EmailTokenCodec:
    """Short-lived tokens embedded in e-mail confirmation links."""

    def __init__(self, settings: Settings):
        self._secret = settings.email_secret_key
        self._algorithm = settings.jwt_algorithm
        self._expire_minutes = settings.email_token_expire_minutes

    def encode(self, username: str) -> str:
        expire = _now() + timedelta(minutes=self._expire_minutes)
        return jwt.encode({"user": username, "exp": int(expire.timestamp())}, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Optional[str]:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError:
            return None
        username = payload.get("user")
        return username if isinstance(username, str) else None
