"""Authorization decisions over the identity decoded from the request token.

Every check raises the same ``UnauthorizedError`` on denial, whether the
caller is anonymous or simply the wrong user, so the HTTP layer never has to
tell the two apart.
"""
from typing import Optional

from .auth import Identity
from .errors import UnauthorizedError


def ensure_logged_in(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise UnauthorizedError()
    return identity


def ensure_admin(identity: Optional[Identity]) -> Identity:
    identity = ensure_logged_in(identity)
    if not identity.is_admin:
        raise UnauthorizedError()
    return identity


def ensure_correct_user_or_admin(identity: Optional[Identity], username: Optional[str]) -> Identity:
    identity = ensure_logged_in(identity)
    if not (identity.is_admin or identity.username == username):
        raise UnauthorizedError()
    return identity
