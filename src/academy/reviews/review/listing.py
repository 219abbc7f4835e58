"""Read-only review queries. None of these touch aggregate fields."""

from academy.catalogue.reviewable import load_item
from academy.reviews.review.review import Review
from academy.shared.query import fetch_all
from academy.shared.reviewable import ReviewableRef


def _newest_first(reviews):
    return sorted(reviews, key=lambda review: review.created_at, reverse=True)


def reviews_for_item(kind, item_id):
    """Reviews of one product or course; raises ObjectNotFoundError if the item is missing."""
    ref = ReviewableRef.of(kind, item_id)
    load_item(ref)
    return _newest_first(fetch_all(Review, reviewable_id=ref.item_id, reviewable_kind=ref.kind.value))


def reviews_by_user(user_id):
    return _newest_first(fetch_all(Review, user_id=str(user_id)))


def all_reviews():
    return _newest_first(fetch_all(Review))
