"""Orders: services booked by a user, priced and eventually completed."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..errors import BadRequestError, NotFoundError
from ..models import UserService
from ..repositories import ServiceRepository, UserRepository, UserServiceRepository
from ..sql import sql_for_partial_update
from .validators import is_number

logger = logging.getLogger(__name__)

USER_SERVICE_FIELDS = {
    "confirmedPrice": "confirmed_price",
    "additionInfo": "addition_info",
}


class UserServiceManager:
    def __init__(self, db: Session):
        self.orders = UserServiceRepository(db)
        self.users = UserRepository(db)
        self.services = ServiceRepository(db)

    def _user_id(self, username: str) -> int:
        user = self.users.get(username)
        if user is None:
            raise NotFoundError(f"No user: {username}")
        return user.id

    def get(self, user_service_id: int) -> UserService:
        order = self.orders.get(user_service_id)
        if order is None:
            raise NotFoundError(f"No user service found with ID: {user_service_id}")
        return order

    def get_user_services(self, username: str) -> List[Dict[str, Any]]:
        return self.orders.list_for_user(self._user_id(username))

    def get_all_user_services(self) -> List[Dict[str, Any]]:
        return self.orders.list_with_users()

    def add_service_to_user(
        self,
        username: str,
        service_id: int,
        confirmed_price: Any,
        addition_info: Optional[str] = None,
        is_completed: bool = False,
    ) -> UserService:
        user_id = self._user_id(username)
        if self.services.get(service_id) is None:
            raise NotFoundError(f"No service: {service_id}")
        if not is_number(confirmed_price) or confirmed_price < 0:
            raise BadRequestError("Confirmed price must be a non-negative number")

        order = self.orders.insert(
            {
                "user_id": user_id,
                "service_id": service_id,
                "confirmed_price": confirmed_price,
                "is_completed": is_completed,
                "addition_info": addition_info,
            }
        )
        logger.info("Added service %s to user %s as order %s", service_id, username, order.id)
        return order

    def complete_service(self, user_service_id: int) -> UserService:
        """Mark an order completed and stamp its fulfilled date in one statement."""
        order = self.orders.set_values(user_service_id, is_completed=True, fulfilled_date=func.now())
        if order is None:
            raise NotFoundError(f"No user service found with ID: {user_service_id}")
        logger.info("Completed user service %s", user_service_id)
        return order

    def change_price(self, user_service_id: int, price: Any) -> UserService:
        if not is_number(price) or price <= 0:
            raise BadRequestError("Price must be a positive number")
        order = self.orders.set_values(user_service_id, confirmed_price=price)
        if order is None:
            raise NotFoundError(f"No user service found with ID: {user_service_id}")
        logger.info("Changed price of user service %s to %s", user_service_id, price)
        return order

    def update(self, user_service_id: int, data: Mapping[str, Any]) -> UserService:
        self.get(user_service_id)
        order = self.orders.update_by_key(user_service_id, sql_for_partial_update(data, USER_SERVICE_FIELDS))
        if order is None:
            raise NotFoundError(f"No user service found with ID: {user_service_id}")
        return order

    def remove(self, user_service_id: int) -> None:
        if self.orders.delete_by_key(user_service_id) is None:
            raise NotFoundError(f"No user service found with ID: {user_service_id}")
        logger.info("Deleted user service %s", user_service_id)
