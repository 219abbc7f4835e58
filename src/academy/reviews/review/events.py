"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from academy.domain import academy


@academy.event(part_of="Review")
class ReviewSubmitted:
    """A user reviewed a product or course."""

    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reviewable_id = Identifier(required=True)
    reviewable_kind = String(required=True)
    rating = Integer(required=True)
    comment = Text(required=True)
    submitted_at = DateTime(required=True)


@academy.event(part_of="Review")
class ReviewEdited:
    """The author changed the rating and/or comment of a review."""

    __version__ = 1

    review_id = Identifier(required=True)
    reviewable_id = Identifier(required=True)
    reviewable_kind = String(required=True)
    rating = Integer(required=True)
    previous_rating = Integer(required=True)
    comment = Text(required=True)
    edited_at = DateTime(required=True)
