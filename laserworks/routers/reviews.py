from fastapi import APIRouter, Depends, status

from ..auth import Identity
from ..dependencies import get_review_manager, get_user_manager, require_correct_user_or_admin
from ..managers import ReviewManager, UserManager
from ..schemas import Deleted, ReviewCreate, ReviewResponse, ReviewSavedResponse, ReviewsResponse, ReviewUpdate

router = APIRouter(prefix="/reviews", tags=["reviews"])


def _owner(identity: Identity, username: str):
    # Admins may act on any review; everyone else only on their own.
    return None if identity.is_admin else username


@router.get("", response_model=ReviewsResponse)
def list_reviews(reviews: ReviewManager = Depends(get_review_manager)) -> dict:
    return {"reviews": reviews.get_all_reviews()}


@router.get("/{review_id}", response_model=ReviewResponse)
def get_review(review_id: int, reviews: ReviewManager = Depends(get_review_manager)) -> dict:
    return {"review": reviews.get_review(review_id)}


@router.post("/{username}", response_model=ReviewSavedResponse, status_code=status.HTTP_201_CREATED)
def create_review(
    username: str,
    review_in: ReviewCreate,
    reviews: ReviewManager = Depends(get_review_manager),
    users: UserManager = Depends(get_user_manager),
    _: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    """Review a service as ``username``."""
    author = users.get_user(username)
    data = {"userId": author.id, **review_in.model_dump(by_alias=True)}
    return {"review": reviews.add_review(data)}


@router.patch("/{review_id}/{username}", response_model=ReviewSavedResponse)
def update_review(
    review_id: int,
    username: str,
    review_update: ReviewUpdate,
    reviews: ReviewManager = Depends(get_review_manager),
    identity: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    return {"review": reviews.update(review_id, review_update.changes(), owner=_owner(identity, username))}


@router.delete("/{review_id}/{username}", response_model=Deleted)
def delete_review(
    review_id: int,
    username: str,
    reviews: ReviewManager = Depends(get_review_manager),
    identity: Identity = Depends(require_correct_user_or_admin),
) -> dict:
    reviews.remove(review_id, owner=_owner(identity, username))
    return {"deleted": review_id}
