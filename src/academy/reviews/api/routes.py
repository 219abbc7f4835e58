"""FastAPI routes for reviews and ratings.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts).
"""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from academy.reviews.api.schemas import (
    EditReviewRequest,
    ReviewIdResponse,
    ReviewListResponse,
    ReviewResponse,
    StatusResponse,
    SubmitReviewRequest,
)
from academy.reviews.review.editing import EditReview
from academy.reviews.review.listing import all_reviews, reviews_by_user, reviews_for_item
from academy.reviews.review.removal import DeleteReview
from academy.reviews.review.submission import SubmitReview

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


def _review_response(review) -> ReviewResponse:
    return ReviewResponse(
        review_id=str(review.id),
        user_id=str(review.user_id),
        name=review.name,
        reviewable_id=str(review.reviewable_id),
        reviewable_kind=review.reviewable_kind,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


def _list_response(reviews) -> ReviewListResponse:
    return ReviewListResponse(reviews=[_review_response(review) for review in reviews])


@review_router.post("", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    """Review a product or course."""
    command = SubmitReview(
        user_id=body.user_id,
        reviewable_id=body.reviewable_id,
        reviewable_kind=body.reviewable_kind,
        rating=body.rating,
        comment=body.comment,
    )
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(review_id: str, body: EditReviewRequest) -> StatusResponse:
    """Edit the rating and/or comment of your own review."""
    command = EditReview(
        review_id=review_id,
        user_id=body.user_id,
        rating=body.rating,
        comment=body.comment,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user_id: str) -> StatusResponse:
    """Delete a review. Allowed for its author and for admins."""
    current_domain.process(DeleteReview(review_id=review_id, user_id=user_id), asynchronous=False)
    return StatusResponse()


@review_router.get("", response_model=ReviewListResponse)
async def list_reviews() -> ReviewListResponse:
    return _list_response(all_reviews())


@review_router.get("/users/{user_id}", response_model=ReviewListResponse)
async def list_user_reviews(user_id: str) -> ReviewListResponse:
    return _list_response(reviews_by_user(user_id))


@review_router.get("/{kind}/{item_id}", response_model=ReviewListResponse)
async def list_item_reviews(kind: str, item_id: str) -> ReviewListResponse:
    """Reviews of one product or course, newest first."""
    return _list_response(reviews_for_item(kind, item_id))
