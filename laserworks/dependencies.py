"""Reusable FastAPI dependencies for identity, authorization and the managers."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from . import permissions
from .auth import Identity, PasswordHasher, TokenCodec
from .config import Settings, get_settings
from .database import get_db
from .emails import ConfirmationMailer
from .managers import ReviewManager, ServiceManager, UserManager, UserServiceManager

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec(settings)


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    codec: TokenCodec = Depends(get_token_codec),
) -> Optional[Identity]:
    """Decode the bearer token, if any. Bad tokens count as anonymous."""
    if credentials is None:
        return None
    return codec.decode(credentials.credentials)


def require_admin(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    return permissions.ensure_admin(identity)


def require_correct_user_or_admin(username: str, identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """Owner-or-admin check against the ``{username}`` path parameter."""
    return permissions.ensure_correct_user_or_admin(identity, username)


def get_user_manager(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> UserManager:
    return UserManager(db, PasswordHasher(settings))


def get_service_manager(db: Session = Depends(get_db)) -> ServiceManager:
    return ServiceManager(db)


def get_user_service_manager(db: Session = Depends(get_db)) -> UserServiceManager:
    return UserServiceManager(db)


def get_review_manager(db: Session = Depends(get_db)) -> ReviewManager:
    return ReviewManager(db)


def get_mailer(settings: Settings = Depends(get_settings)) -> ConfirmationMailer:
    return ConfirmationMailer(settings)
