"""User aggregate: a learner or administrator.

``reviews_count`` and ``purchases_count`` move in lockstep with review and
order creation/deletion. Decrements stop at zero, so the counters never go
negative even when a deletion is replayed.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Integer, String

from academy.domain import academy


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


@academy.aggregate
class User:
    name = String(required=True, max_length=50)
    email = String(required=True, max_length=255, unique=True)
    role = String(choices=UserRole, default=UserRole.USER.value)
    purchases_count = Integer(default=0, min_value=0)
    reviews_count = Integer(default=0, min_value=0)
    created_at = DateTime()

    @classmethod
    def register(cls, name, email, role=None):
        return cls(
            name=name.strip(),
            email=email.strip().lower(),
            role=role or UserRole.USER.value,
            purchases_count=0,
            reviews_count=0,
            created_at=datetime.now(UTC),
        )

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    def increment_reviews(self):
        self.reviews_count = self.reviews_count + 1

    def decrement_reviews(self):
        if self.reviews_count > 0:
            self.reviews_count = self.reviews_count - 1

    def increment_purchases(self):
        self.purchases_count = self.purchases_count + 1

    def decrement_purchases(self):
        if self.purchases_count > 0:
            self.purchases_count = self.purchases_count - 1
