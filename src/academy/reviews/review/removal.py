"""DeleteReview: remove a review and re-derive its item's rating.

The author may always delete their review. Other users may delete it only if
their stored role is admin and ``admin_can_delete_reviews`` is enabled in the
domain's custom config (the default). The author's ``reviews_count`` is
decremented, floored at zero. The decrement is skipped if the author no
longer exists.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from academy.domain import academy
from academy.errors import ForbiddenError
from academy.identity.user.user import User
from academy.reviews.rating import recompute
from academy.reviews.review.review import Review

logger = structlog.get_logger(__name__)


@academy.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)  # The acting user


def _admin_override_enabled():
    custom = current_domain.config.get("custom") or {}
    return bool(custom.get("admin_can_delete_reviews", True))


def _may_delete(review, user_id):
    if review.is_authored_by(user_id):
        return True
    if not _admin_override_enabled():
        return False
    try:
        actor = current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError:
        return False
    return actor.is_admin


@academy.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if not _may_delete(review, command.user_id):
            raise ForbiddenError({"user_id": ["Not authorized to delete this review."]})

        ref = review.reviewable
        repo._dao.delete(review)

        user_repo = current_domain.repository_for(User)
        try:
            author = user_repo.get(str(review.user_id))
        except ObjectNotFoundError:
            logger.warning("Author of deleted review no longer exists", review_id=str(review.id))
        else:
            author.decrement_reviews()
            user_repo.add(author)

        recompute(ref)

        logger.info("Review deleted", review_id=str(review.id), reviewable=str(ref), deleted_by=str(command.user_id))
