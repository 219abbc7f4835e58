"""Rating aggregation for reviewable items.

``recompute`` re-derives an item's ``average_rating`` and ``review_count`` from
the full set of its stored reviews and writes them onto the item. It never
applies deltas, so a lost or raced update is corrected by the next recompute.

There is no lock around the read-then-write. Two concurrent recomputes of
one item resolve last-writer-wins, and the next recompute of that item
repairs the values.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from academy.catalogue.reviewable import aggregate_for
from academy.reviews.review.review import Review
from academy.shared.query import fetch_all

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    average_rating: float
    review_count: int


def summarize(ratings):
    """Mean and count of ``ratings``; ``(0.0, 0)`` when there are none."""
    ratings = list(ratings)
    if not ratings:
        return RatingSummary(average_rating=0.0, review_count=0)
    return RatingSummary(average_rating=sum(ratings) / len(ratings), review_count=len(ratings))


def ratings_for(ref):
    reviews = fetch_all(Review, reviewable_id=ref.item_id, reviewable_kind=ref.kind.value)
    return [review.rating for review in reviews]


def recompute(ref):
    """Recompute and persist the rating summary of the item ``ref`` points at.

    When the item no longer exists (it was deleted and its reviews cascaded)
    the write is skipped; the computed summary is still returned.
    """
    summary = summarize(ratings_for(ref))

    repo = current_domain.repository_for(aggregate_for(ref.kind))
    try:
        item = repo.get(ref.item_id)
    except ObjectNotFoundError:
        logger.info("Skipping rating update for missing item", reviewable=str(ref))
        return summary

    item.record_rating(summary.average_rating, summary.review_count)
    repo.add(item)

    logger.debug(
        "Rating recomputed",
        reviewable=str(ref),
        average_rating=summary.average_rating,
        review_count=summary.review_count,
    )
    return summary
