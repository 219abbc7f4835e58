"""Cascading removal of records that reference a deleted user or item.

Each function runs inside the caller's unit of work, so either the whole
cascade and the triggering delete are committed, or nothing is. Failures
propagate to the caller.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from academy.identity.user.user import User
from academy.learning.enrollment.enrollment import Enrollment
from academy.ordering.order.order import Order
from academy.reviews.rating import recompute
from academy.reviews.review.review import Review
from academy.shared.query import fetch_all
from academy.shared.reviewable import ReviewableKind

logger = structlog.get_logger(__name__)


def _delete_all(aggregate_cls, records):
    dao = current_domain.repository_for(aggregate_cls)._dao
    for record in records:
        dao.delete(record)
    return len(records)


def cascade_user_deletion(user_id):
    """Remove every review, order and enrollment owned by ``user_id``.

    The ratings of the items the user had reviewed are recomputed. Returns
    the refs of those items.
    """
    user_id = str(user_id)
    reviews = fetch_all(Review, user_id=user_id)
    affected = {review.reviewable for review in reviews}

    removed_reviews = _delete_all(Review, reviews)
    removed_orders = _delete_all(Order, fetch_all(Order, user_id=user_id))
    removed_enrollments = _delete_all(Enrollment, fetch_all(Enrollment, user_id=user_id))

    for ref in affected:
        recompute(ref)

    logger.info(
        "User cascade completed",
        user_id=user_id,
        reviews=removed_reviews,
        orders=removed_orders,
        enrollments=removed_enrollments,
        items_recomputed=len(affected),
    )
    return affected


def cascade_item_deletion(ref):
    """Remove every review of the item ``ref`` points at.

    Each author's ``reviews_count`` goes down by one per removed review.
    Deleting a course also removes its enrollments.
    """
    reviews = fetch_all(Review, reviewable_id=ref.item_id, reviewable_kind=ref.kind.value)

    user_repo = current_domain.repository_for(User)
    for review in reviews:
        try:
            author = user_repo.get(str(review.user_id))
        except ObjectNotFoundError:
            logger.warning("Review author no longer exists", review_id=str(review.id))
            continue
        author.decrement_reviews()
        user_repo.add(author)

    removed_reviews = _delete_all(Review, reviews)

    removed_enrollments = 0
    if ref.kind == ReviewableKind.COURSE:
        removed_enrollments = _delete_all(Enrollment, fetch_all(Enrollment, course_id=ref.item_id))

    logger.info(
        "Item cascade completed",
        reviewable=str(ref),
        reviews=removed_reviews,
        enrollments=removed_enrollments,
    )
