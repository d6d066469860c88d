"""The catalog of engraving services.

Admin-only operations are enforced by the routes; the manager trusts its
caller.
"""
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from ..errors import BadRequestError, NotFoundError
from ..models import Service
from ..repositories import ReviewRepository, ServiceRepository
from ..sql import sql_for_partial_update
from .validators import is_number

logger = logging.getLogger(__name__)

SERVICE_FIELDS = {
    "title": "title",
    "description": "description",
    "price": "price",
    "isActive": "is_active",
}


class ServiceManager:
    def __init__(self, db: Session):
        self.services = ServiceRepository(db)
        self.reviews = ReviewRepository(db)

    def get_all_services(self) -> List[Service]:
        return self.services.list()

    def get_service(self, service_id: int) -> Service:
        service = self.services.get(service_id)
        if service is None:
            raise NotFoundError(f"No service found with ID: {service_id}")
        return service

    def add_service(self, title: str, description: str, price: Any, is_active: bool = True) -> Service:
        if not title or not description or not is_number(price) or not isinstance(is_active, bool):
            raise BadRequestError("Missing required fields")
        if price < 0:
            raise BadRequestError("Price must not be negative")
        service = self.services.insert(
            {"title": title, "description": description, "price": price, "is_active": is_active}
        )
        logger.info("Added service %s (%s)", service.id, title)
        return service

    def update(self, service_id: int, data: Mapping[str, Any]) -> Service:
        self.get_service(service_id)
        if "price" in data and (not is_number(data["price"]) or data["price"] < 0):
            raise BadRequestError("Price must be a non-negative number")
        service = self.services.update_by_key(service_id, sql_for_partial_update(data, SERVICE_FIELDS))
        if service is None:
            raise NotFoundError(f"No service: {service_id}")
        return service

    def _set_active(self, service_id: int, is_active: bool) -> Service:
        service = self.services.set_values(service_id, is_active=is_active)
        if service is None:
            raise NotFoundError(f"No service found with ID: {service_id}")
        logger.info("Service %s is_active=%s", service_id, is_active)
        return service

    def activate(self, service_id: int) -> Service:
        return self._set_active(service_id, True)

    def deactivate(self, service_id: int) -> Service:
        return self._set_active(service_id, False)

    def remove(self, service_id: int) -> None:
        if self.services.delete_by_key(service_id) is None:
            raise NotFoundError(f"No service found with service ID: {service_id}")
        logger.info("Deleted service %s", service_id)

    def get_service_reviews(self, service_id: int) -> List[Dict[str, Any]]:
        self.get_service(service_id)
        return self.reviews.list_for_service(service_id)
