"""EditReview: the author changes the rating and/or comment of a review.

Fields left out of the command keep their stored values. The item's rating
is recomputed after the review is saved.
"""

from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from academy.domain import academy
from academy.errors import ForbiddenError
from academy.reviews.rating import recompute
from academy.reviews.review.review import Review


@academy.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Must match the author
    rating = Integer(min_value=1, max_value=5)
    comment = Text()


@academy.command_handler(part_of=Review)
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)

        if not review.is_authored_by(command.user_id):
            raise ForbiddenError({"user_id": ["Not authorized to update this review."]})

        kwargs = {}
        if command.rating is not None:
            kwargs["rating"] = command.rating
        if command.comment is not None:
            kwargs["comment"] = command.comment

        review.edit(**kwargs)
        repo.add(review)

        recompute(review.reviewable)
