"""Application tests for HideReview / UnhideReview."""

import pytest
from protean import current_domain

from filmcatalog.moderation.flagging import FlagReview
from filmcatalog.moderation.visibility import HideReview, UnhideReview
from filmcatalog.review.review import Review
from filmcatalog.shared.errors import ForbiddenError, InvalidStateError, NotFoundError


def _hide(review_id, moderator_id):
    current_domain.process(HideReview(review_id=review_id, moderator_id=moderator_id), asynchronous=False)


def _unhide(review_id, moderator_id):
    current_domain.process(UnhideReview(review_id=review_id, moderator_id=moderator_id), asynchronous=False)


def _review(review_id):
    return current_domain.repository_for(Review).get(review_id)


class TestHideReview:
    def test_admin_hides_regardless_of_flags(self, admin, alice_review):
        _hide(alice_review, admin)

        review = _review(alice_review)
        assert review.hidden is True
        assert review.hidden_by == admin
        assert review.flag_count == 0

    def test_member_cannot_hide(self, bob, alice_review):
        with pytest.raises(ForbiddenError) as exc:
            _hide(alice_review, bob)
        assert "Only admins" in str(exc.value)
        assert _review(alice_review).hidden is False

    def test_unknown_moderator(self, alice_review):
        with pytest.raises(NotFoundError):
            _hide(alice_review, "ghost")

    def test_hiding_twice_is_invalid(self, admin, alice_review):
        _hide(alice_review, admin)
        with pytest.raises(InvalidStateError):
            _hide(alice_review, admin)

    def test_unknown_review(self, admin):
        with pytest.raises(NotFoundError):
            _hide("nobody::nothing", admin)


class TestUnhideReview:
    def test_unhide_keeps_flag_count(self, admin, alice_review, flaggers):
        for reporter in flaggers(10):
            current_domain.process(FlagReview(review_id=alice_review, reporter_id=reporter), asynchronous=False)
        assert _review(alice_review).hidden is True

        _unhide(alice_review, admin)

        review = _review(alice_review)
        assert review.hidden is False
        assert review.flag_count == 10

    def test_next_flag_hides_again(self, admin, alice_review, flaggers):
        reporters = flaggers(11)
        for reporter in reporters[:10]:
            current_domain.process(FlagReview(review_id=alice_review, reporter_id=reporter), asynchronous=False)
        _unhide(alice_review, admin)

        current_domain.process(FlagReview(review_id=alice_review, reporter_id=reporters[10]), asynchronous=False)

        review = _review(alice_review)
        assert review.hidden is True
        assert review.flag_count == 11

    def test_unhiding_visible_review_is_invalid(self, admin, alice_review):
        with pytest.raises(InvalidStateError):
            _unhide(alice_review, admin)

    def test_member_cannot_unhide(self, admin, bob, alice_review):
        _hide(alice_review, admin)
        with pytest.raises(ForbiddenError):
            _unhide(alice_review, bob)
