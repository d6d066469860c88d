"""Orders. Users see and place their own; admins complete and reprice them.

The ``{username}`` segment of the admin routes is only informational, rows are
addressed by their id.
"""
from fastapi import APIRouter, Depends, status

from ..auth import Identity
from ..dependencies import get_user_service_manager, require_admin, require_correct_user_or_admin
from ..managers import UserServiceManager
from ..schemas import (
    Deleted,
    PriceChange,
    UserServiceCreate,
    UserServiceResponse,
    UserServicesResponse,
    UserServiceUpdate,
)

router = APIRouter(prefix="/user-services", tags=["user-services"])


@router.get("", response_model=UserServicesResponse)
def list_all_user_services(
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"user_services": orders.get_all_user_services()}


@router.get("/{username}", response_model=UserServicesResponse)
def list_user_services(
    username: str,
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    return {"user_services": orders.get_user_services(username)}


@router.post("/{username}", response_model=UserServiceResponse, status_code=status.HTTP_201_CREATED)
def add_user_service(
    username: str,
    order_in: UserServiceCreate,
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    order = orders.add_service_to_user(
        username, order_in.service_id, order_in.confirmed_price, order_in.addition_info
    )
    return {"user_service": order}


@router.patch("/{username}/complete/{user_service_id}", response_model=UserServiceResponse)
def complete_user_service(
    username: str,
    user_service_id: int,
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"user_service": orders.complete_service(user_service_id)}


@router.patch("/{username}/price/{user_service_id}", response_model=UserServiceResponse)
def change_user_service_price(
    username: str,
    user_service_id: int,
    payload: PriceChange,
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"user_service": orders.change_price(user_service_id, payload.price)}


@router.patch("/{username}/{user_service_id}", response_model=UserServiceResponse)
def update_user_service(
    username: str,
    user_service_id: int,
    order_update: UserServiceUpdate,
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    return {"user_service": orders.update(user_service_id, order_update.changes())}


@router.delete("/{username}/{user_service_id}", response_model=Deleted)
def delete_user_service(
    username: str,
    user_service_id: int,
    orders: UserServiceManager = Depends(get_user_service_manager),
    _: Identity = Depends(require_admin),
) -> dict:
    orders.remove(user_service_id)
    return {"deleted": user_service_id}
