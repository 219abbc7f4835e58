"""SubmitReview: review a product or course.

The reviewable kind and the rating range are validated when the command is
built, before any store access. The handler then checks that the author and
the item exist and that the author has not reviewed this item yet. It
persists the review, bumps the author's ``reviews_count`` and recomputes
the item's rating, all in one unit of work.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from academy.catalogue.reviewable import load_item
from academy.domain import academy
from academy.errors import ConflictError, unique_index_as_conflict
from academy.identity.user.user import User
from academy.reviews.rating import recompute
from academy.reviews.review.review import AUTHOR_ITEM_INDEX, Review
from academy.shared.query import fetch_one
from academy.shared.reviewable import ReviewableKind, ReviewableRef

logger = structlog.get_logger(__name__)

_ALREADY_REVIEWED = {"review": ["You have already reviewed this item."]}


@academy.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    reviewable_id = Identifier(required=True)
    reviewable_kind = String(choices=ReviewableKind, required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


@academy.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        ref = ReviewableRef.of(command.reviewable_kind, command.reviewable_id)

        user_repo = current_domain.repository_for(User)
        author = user_repo.get(command.user_id)
        load_item(ref)

        existing = fetch_one(
            Review,
            user_id=str(command.user_id),
            reviewable_id=ref.item_id,
            reviewable_kind=ref.kind.value,
        )
        if existing is not None:
            raise ConflictError(_ALREADY_REVIEWED)

        review = Review.submit(
            user_id=command.user_id,
            reviewable=ref,
            rating=command.rating,
            comment=command.comment,
            name=author.name,
        )
        with unique_index_as_conflict(AUTHOR_ITEM_INDEX, _ALREADY_REVIEWED):
            current_domain.repository_for(Review).add(review)

        author.increment_reviews()
        user_repo.add(author)

        recompute(ref)

        logger.info("Review submitted", review_id=str(review.id), reviewable=str(ref), user_id=str(command.user_id))
        return str(review.id)
