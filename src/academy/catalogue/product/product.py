"""Product aggregate: a downloadable certificate, notes bundle or exam.

Products are reviewable. ``average_rating`` and ``review_count`` are derived
from the product's reviews and are written only through ``record_rating``,
which the rating aggregator calls.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from academy.domain import academy

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class ProductType(Enum):
    CERTIFICATE = "certificate"
    NOTES = "notes"
    EXAM = "exam"


@academy.aggregate
class Product:
    name = String(required=True, max_length=255)
    subject_name = String(required=True, max_length=255)
    subject_code = String(required=True, max_length=50)
    product_type = String(choices=ProductType, required=True)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    sale_enabled = Boolean(default=False)
    sale_price = Float(min_value=0.0)
    image_url = String(max_length=500)
    pdf_link = String(max_length=500)

    # Derived from reviews
    average_rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def sale_price_required_when_sale_enabled(self):
        if self.sale_enabled and self.sale_price is None:
            raise ValidationError({"sale_price": ["A sale price is required when the sale is enabled"]})

    @classmethod
    def create(
        cls,
        name,
        subject_name,
        subject_code,
        product_type,
        description,
        price,
        sale_enabled=False,
        sale_price=None,
        image_url=None,
        pdf_link=None,
    ):
        now = datetime.now(UTC)
        return cls(
            name=name,
            subject_name=subject_name,
            subject_code=subject_code,
            product_type=str(product_type).strip().lower(),
            description=description,
            price=price,
            sale_enabled=sale_enabled,
            sale_price=sale_price,
            image_url=image_url,
            pdf_link=pdf_link,
            average_rating=0.0,
            review_count=0,
            created_at=now,
            updated_at=now,
        )

    @property
    def effective_price(self):
        if self.sale_enabled and self.sale_price is not None:
            return self.sale_price
        return self.price

    def update_details(
        self,
        name=_UNSET,
        description=_UNSET,
        price=_UNSET,
        sale_enabled=_UNSET,
        sale_price=_UNSET,
        image_url=_UNSET,
        pdf_link=_UNSET,
    ):
        changes = {
            "name": name,
            "description": description,
            "price": price,
            "sale_enabled": sale_enabled,
            "sale_price": sale_price,
            "image_url": image_url,
            "pdf_link": pdf_link,
        }
        with atomic_change(self):
            for field_name, value in changes.items():
                if value is not _UNSET:
                    setattr(self, field_name, value)
            self.updated_at = datetime.now(UTC)

    def record_rating(self, average_rating, review_count):
        self.average_rating = average_rating
        self.review_count = review_count
