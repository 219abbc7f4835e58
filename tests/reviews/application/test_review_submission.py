"""Application tests for the SubmitReview handler."""

import pytest
from academy.catalogue.course.course import Course
from academy.catalogue.product.product import Product
from academy.errors import ConflictError
from academy.identity.user.user import User
from academy.reviews.review.review import Review
from academy.reviews.review.submission import SubmitReview
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


class TestSubmitReview:
    def test_review_persisted_with_author_name(self, make_user, make_course, make_review):
        user_id = make_user(name="Meera")
        course_id = make_course()

        review_id = make_review(user_id, course_id, rating=4, comment="Great pacing.")

        review = current_domain.repository_for(Review).get(review_id)
        assert review.name == "Meera"
        assert review.rating == 4
        assert review.reviewable_kind == "Course"

    def test_item_rating_updated(self, make_user, make_product, make_review):
        product_id = make_product()
        make_review(make_user(), product_id, kind="Product", rating=5)
        make_review(make_user(), product_id, kind="Product", rating=2)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.average_rating == 3.5
        assert product.review_count == 2

    def test_author_reviews_count_incremented(self, make_user, make_course, make_product, make_review):
        user_id = make_user()
        make_review(user_id, make_course())
        make_review(user_id, make_product(), kind="Product")

        user = current_domain.repository_for(User).get(user_id)
        assert user.reviews_count == 2

    def test_one_review_per_item_not_per_user(self, make_user, make_course, make_review):
        user_id = make_user()
        first = make_course(title="Course A")
        second = make_course(title="Course B")
        make_review(user_id, first)
        make_review(user_id, second)

        assert current_domain.repository_for(Course).get(first).review_count == 1
        assert current_domain.repository_for(Course).get(second).review_count == 1

    def test_duplicate_review_conflicts(self, make_user, make_course, make_review):
        user_id = make_user()
        course_id = make_course()
        make_review(user_id, course_id, rating=5)

        with pytest.raises(ConflictError) as exc:
            make_review(user_id, course_id, rating=1)
        assert "You have already reviewed this item." in str(exc.value)

        course = current_domain.repository_for(Course).get(course_id)
        assert course.review_count == 1
        assert course.average_rating == 5.0
        assert current_domain.repository_for(User).get(user_id).reviews_count == 1

    def test_duplicate_past_lookup_hits_unique_index(self, make_user, make_course, make_review, monkeypatch):
        from academy.reviews.review import submission

        user_id = make_user()
        course_id = make_course()
        make_review(user_id, course_id, rating=5)

        monkeypatch.setattr(submission, "fetch_one", lambda *args, **kwargs: None)
        with pytest.raises(ConflictError) as exc:
            make_review(user_id, course_id, rating=1)
        assert "You have already reviewed this item." in str(exc.value)

        course = current_domain.repository_for(Course).get(course_id)
        assert (course.review_count, course.average_rating) == (1, 5.0)
        assert current_domain.repository_for(User).get(user_id).reviews_count == 1

    def test_unknown_kind_rejected_before_store_access(self):
        with pytest.raises(ValidationError) as exc:
            SubmitReview(
                user_id="u-1",
                reviewable_id="x-1",
                reviewable_kind="Lesson",
                rating=3,
                comment="Nice.",
            )
        assert "reviewable_kind" in exc.value.messages

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range_rating_rejected(self, rating):
        with pytest.raises(ValidationError) as exc:
            SubmitReview(
                user_id="u-1",
                reviewable_id="x-1",
                reviewable_kind="Course",
                rating=rating,
                comment="Nice.",
            )
        assert "rating" in exc.value.messages

    def test_missing_item_not_found(self, make_user, make_review):
        with pytest.raises(ObjectNotFoundError):
            make_review(make_user(), "no-such-course", kind="Course")

    def test_missing_author_not_found(self, make_course, make_review):
        with pytest.raises(ObjectNotFoundError):
            make_review("ghost-user", make_course())

    def test_kind_and_id_must_match(self, make_user, make_course, make_review):
        course_id = make_course()
        with pytest.raises(ObjectNotFoundError):
            make_review(make_user(), course_id, kind="Product")
