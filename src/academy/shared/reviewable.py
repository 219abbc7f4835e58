"""Polymorphic review target: a closed set of item kinds plus an item id.

A review points at either a Product or a Course. The pair is modelled as a
tagged union, ``ReviewableRef(kind, item_id)``, whose ``kind`` comes from the
closed ``ReviewableKind`` enum. Anything outside the enum is rejected before
a store lookup happens.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ValidationError


class ReviewableKind(Enum):
    PRODUCT = "Product"
    COURSE = "Course"

    @classmethod
    def parse(cls, value):
        """Return the kind for ``value`` (a kind or its string form)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                {"reviewable_kind": [f"Invalid reviewable type '{value}', expected one of Product, Course"]}
            ) from None


@dataclass(frozen=True)
class ReviewableRef:
    kind: ReviewableKind
    item_id: str

    @classmethod
    def of(cls, kind, item_id):
        if not item_id:
            raise ValidationError({"reviewable_id": ["Reviewable ID is required"]})
        return cls(kind=ReviewableKind.parse(kind), item_id=str(item_id))

    def __str__(self):
        return f"{self.kind.value}:{self.item_id}"
