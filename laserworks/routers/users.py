from fastapi import APIRouter, Depends

from ..auth import Identity
from ..dependencies import get_user_manager, require_admin, require_correct_user_or_admin
from ..managers import UserManager
from ..schemas import Deleted, UserResponse, UsersResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UsersResponse)
def list_users(
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"users": users.list_users()}


@router.get("/{username}", response_model=UserResponse)
def get_user(
    username: str,
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    return {"user": users.get_user(username)}


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    user_update: UserUpdate,
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    """Partial update; changing the password requires the current ``password``."""
    return {"user": users.update(username, user_update.changes())}


@router.delete("/{username}", response_model=Deleted)
def delete_user(
    username: str,
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    users.remove(username)
    return {"deleted": username}


@router.patch("/{username}/deactivate", response_model=UserResponse)
def deactivate_user(
    username: str,
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    return {"user": users.deactivate(username)}


@router.patch("/{username}/activate", response_model=UserResponse)
def activate_user(
    username: str,
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    return {"user": users.activate(username)}
