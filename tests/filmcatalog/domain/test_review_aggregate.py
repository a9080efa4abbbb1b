import pytest
from protean.exceptions import ValidationError

from filmcatalog.review.events import ReviewLiked, ReviewRemoved, ReviewRevised, ReviewWritten
from filmcatalog.review.review import Review, ReviewVisibility, Scores
from filmcatalog.shared.errors import InvalidStateError


def _write(**overrides):
    defaults = {
        "user_id": "u-1",
        "movie_id": "m-1",
        "content": "A patient, strange film.",
        "direction": 5,
        "screenplay": 4,
        "cinematography": 5,
        "general": 4,
    }
    defaults.update(overrides)
    return Review.write(**defaults)


class TestWriteReview:
    def test_identity_is_the_watch_key(self):
        review = _write()
        assert review.review_id == "u-1::m-1"

    def test_starts_visible_with_zero_counters(self):
        review = _write()
        assert review.likes_count == 0
        assert review.flag_count == 0
        assert review.hidden is False
        assert review.visibility == ReviewVisibility.VISIBLE

    def test_raises_review_written(self):
        review = _write()
        events = [e for e in review._events if isinstance(e, ReviewWritten)]
        assert len(events) == 1
        assert events[0].general_score == 4

    def test_blank_content_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _write(content="   ")
        assert "content" in exc.value.messages

    def test_identity_must_match_author_and_movie(self):
        with pytest.raises(ValidationError) as exc:
            Review(
                review_id="u-1::m-2",
                user_id="u-1",
                movie_id="m-1",
                content="Mismatched",
                scores=Scores(direction=3, screenplay=3, cinematography=3, general=3),
            )
        assert "review_id" in exc.value.messages


class TestScores:
    @pytest.mark.parametrize("score", [0, 6, -1])
    def test_out_of_range_scores_rejected(self, score):
        with pytest.raises(ValidationError) as exc:
            Scores(direction=score, screenplay=3, cinematography=3, general=3)
        assert "direction" in exc.value.messages

    def test_bounds_are_inclusive(self):
        scores = Scores(direction=1, screenplay=5, cinematography=1, general=5)
        assert scores.direction == 1
        assert scores.screenplay == 5


class TestReviseReview:
    def test_replaces_content_and_scores(self):
        review = _write()
        review.revise(content="Better on a second watch.", direction=4, screenplay=5, cinematography=4, general=5)

        assert review.content == "Better on a second watch."
        assert review.scores.screenplay == 5
        assert any(isinstance(e, ReviewRevised) for e in review._events)

    def test_keeps_likes_flags_and_visibility(self):
        review = _write()
        review.like("u-2")
        review.record_flag(3, threshold=3)

        review.revise(content="Edited", direction=1, screenplay=1, cinematography=1, general=1)

        assert review.likes_count == 1
        assert review.flag_count == 3
        assert review.hidden is True

    def test_invalid_scores_leave_review_unchanged(self):
        review = _write()
        with pytest.raises(ValidationError):
            review.revise(content="Edited", direction=9, screenplay=1, cinematography=1, general=1)
        assert review.scores.direction == 5


class TestLikeReview:
    def test_each_like_adds_one(self):
        review = _write()
        review.like("u-2")
        review.like("u-3")
        assert review.likes_count == 2

    def test_author_can_like_own_review(self):
        review = _write()
        review.like("u-1")
        liked = [e for e in review._events if isinstance(e, ReviewLiked)]
        assert liked[-1].liked_by == "u-1"
        assert liked[-1].likes_count == 1


class TestRemoveReview:
    def test_marks_removed_and_raises_event(self):
        review = _write()
        review.remove(removed_by="u-1", flags_withdrawn=2)

        assert review.removed is True
        assert review.removed_by == "u-1"
        removed = [e for e in review._events if isinstance(e, ReviewRemoved)]
        assert len(removed) == 1
        assert removed[0].flags_withdrawn == 2

    def test_removing_twice_fails(self):
        review = _write()
        review.remove(removed_by="u-1")
        with pytest.raises(InvalidStateError):
            review.remove(removed_by="u-1")


class TestRewriteReview:
    def test_starts_afresh_over_removed_review(self):
        review = _write()
        review.like("u-2")
        review.record_flag(flag_count=10, threshold=10)
        review.remove(removed_by="admin-1")
        review._events.clear()

        review.rewrite("Second look, still great.", 3, 3, 3, 3)

        assert review.review_id == "u-1::m-1"
        assert review.content == "Second look, still great."
        assert review.scores.general == 3
        assert review.likes_count == 0
        assert review.flag_count == 0
        assert review.hidden is False
        assert review.hidden_by is None
        assert review.removed is False
        written = [e for e in review._events if isinstance(e, ReviewWritten)]
        assert len(written) == 1
        assert written[0].general_score == 3

    def test_live_review_cannot_be_rewritten(self):
        review = _write()
        with pytest.raises(InvalidStateError):
            review.rewrite("Again", 3, 3, 3, 3)
