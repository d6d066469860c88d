"""Customer reviews of services."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from ..errors import BadRequestError, NotFoundError, UnauthorizedError
from ..models import Review
from ..repositories import ReviewRepository, ServiceRepository
from ..sql import sql_for_partial_update, to_columns
from .validators import is_number, is_rating

logger = logging.getLogger(__name__)

REVIEW_FIELDS = {
    "userId": "user_id",
    "serviceId": "service_id",
    "reviewText": "review_text",
    "rating": "rating",
    "time": "time",
}


class ReviewManager:
    def __init__(self, db: Session):
        self.reviews = ReviewRepository(db)
        self.services = ServiceRepository(db)

    def get_review(self, review_id: int) -> Dict[str, Any]:
        review = self.reviews.get_with_author(review_id)
        if review is None:
            raise NotFoundError(f"No review found with ID: {review_id}")
        return review

    def get_all_reviews(self) -> List[Dict[str, Any]]:
        return self.reviews.list_with_authors()

    def add_review(self, data: Mapping[str, Any]) -> Review:
        if (
            not data.get("userId")
            or not data.get("serviceId")
            or not data.get("reviewText")
            or not is_number(data.get("rating"))
        ):
            raise BadRequestError("Missing required fields")
        if not is_rating(data["rating"]):
            raise BadRequestError("Rating must be a whole number from 1 to 5")
        if self.services.get(data["serviceId"]) is None:
            raise NotFoundError(f"No service: {data['serviceId']}")

        fields = to_columns(
            {key: data[key] for key in ("userId", "serviceId", "reviewText", "rating")},
            REVIEW_FIELDS,
        )
        review = self.reviews.insert(fields)
        logger.info("User %s reviewed service %s", review.user_id, review.service_id)
        return review

    def _check_owner(self, review_id: int, owner: Optional[str]) -> Dict[str, Any]:
        review = self.get_review(review_id)
        if owner is not None and review["username"] != owner:
            raise UnauthorizedError()
        return review

    def update(self, review_id: int, data: Mapping[str, Any], owner: Optional[str] = None) -> Review:
        """Partially update a review; ``owner``, when given, must be its author."""
        self._check_owner(review_id, owner)
        if "rating" in data and not is_rating(data["rating"]):
            raise BadRequestError("Rating must be a whole number from 1 to 5")
        review = self.reviews.update_by_key(review_id, sql_for_partial_update(data, REVIEW_FIELDS))
        if review is None:
            raise NotFoundError(f"No review: {review_id}")
        return review

    def remove(self, review_id: int, owner: Optional[str] = None) -> None:
        self._check_owner(review_id, owner)
        if self.reviews.delete_by_key(review_id) is None:
            raise NotFoundError(f"No review found with ID: {review_id}")
        logger.info("Deleted review %s", review_id)
