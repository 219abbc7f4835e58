"""Dispatch from a ReviewableKind to the catalogue aggregate that backs it."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from academy.catalogue.course.course import Course
from academy.catalogue.product.product import Product
from academy.shared.reviewable import ReviewableKind

_AGGREGATES = {
    ReviewableKind.PRODUCT: Product,
    ReviewableKind.COURSE: Course,
}

_unmapped = set(ReviewableKind) - set(_AGGREGATES)
if _unmapped:
    raise RuntimeError(f"Reviewable kinds without an aggregate: {sorted(k.value for k in _unmapped)}")


def aggregate_for(kind):
    return _AGGREGATES[ReviewableKind.parse(kind)]


def load_item(ref):
    """Fetch the Product or Course a ``ReviewableRef`` points at.

    Raises ObjectNotFoundError naming the kind when the item does not exist.
    """
    repo = current_domain.repository_for(aggregate_for(ref.kind))
    try:
        return repo.get(ref.item_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({ref.kind.value.lower(): [f"{ref.kind.value} not found."]}) from None
