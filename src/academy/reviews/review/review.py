"""Review aggregate: one user's rating and comment on a Product or Course.

The target is stored as two flat fields, ``reviewable_id`` and
``reviewable_kind``, so the store can filter on them; ``reviewable`` exposes
the pair as a ``ReviewableRef``. A user may hold at most one review per
target, declared as the unique ``AUTHOR_ITEM_INDEX`` so the database rejects
a duplicate that slips past the submission handler's lookup.
"""

from datetime import UTC, datetime

from protean import Index, atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from academy.domain import academy
from academy.reviews.review.events import ReviewEdited, ReviewSubmitted
from academy.shared.reviewable import ReviewableKind, ReviewableRef

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

AUTHOR_ITEM_INDEX = Index("user_id", "reviewable_kind", "reviewable_id", unique=True, name="uq_review_author_item")


@academy.aggregate(indexes=[AUTHOR_ITEM_INDEX])
class Review:
    user_id = Identifier(required=True)
    name = String(max_length=50)
    reviewable_id = Identifier(required=True)
    reviewable_kind = String(choices=ReviewableKind, required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and not self.comment.strip():
            raise ValidationError({"comment": ["Please add a comment."]})

    @classmethod
    def submit(cls, user_id, reviewable, rating, comment, name=None):
        """Create a review of ``reviewable`` (a ``ReviewableRef``)."""
        now = datetime.now(UTC)
        review = cls(
            user_id=user_id,
            name=name,
            reviewable_id=reviewable.item_id,
            reviewable_kind=reviewable.kind.value,
            rating=rating,
            comment=comment,
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                user_id=str(user_id),
                reviewable_id=reviewable.item_id,
                reviewable_kind=reviewable.kind.value,
                rating=rating,
                comment=comment,
                submitted_at=now,
            )
        )
        return review

    @property
    def reviewable(self):
        return ReviewableRef(kind=ReviewableKind(self.reviewable_kind), item_id=str(self.reviewable_id))

    def is_authored_by(self, user_id):
        return str(self.user_id) == str(user_id)

    def edit(self, rating=_UNSET, comment=_UNSET):
        """Apply a partial update; omitted fields keep their values."""
        previous_rating = self.rating
        now = datetime.now(UTC)

        with atomic_change(self):
            if rating is not _UNSET:
                self.rating = rating
            if comment is not _UNSET:
                self.comment = comment
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                reviewable_id=str(self.reviewable_id),
                reviewable_kind=self.reviewable_kind,
                rating=self.rating,
                previous_rating=previous_rating,
                comment=self.comment,
                edited_at=now,
            )
        )
