"""Shared BDD fixtures and step definitions for the film catalog."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from filmcatalog.directory.movie import Movie
from filmcatalog.directory.user import User
from filmcatalog.moderation.flagging import FlagReview
from filmcatalog.review.queries import reviews_for_movie
from filmcatalog.review.review import Review
from filmcatalog.review.submission import CreateReview
from filmcatalog.shared import errors
from filmcatalog.shared.keys import watch_key
from filmcatalog.watch.queries import has_watched
from filmcatalog.watch.tracking import MarkMovieWatched


@pytest.fixture()
def world():
    """Names used in scenarios mapped to generated ids."""
    return {"users": {}, "movies": {}}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def process(command, error=None):
    if error is None:
        return current_domain.process(command, asynchronous=False)
    try:
        return current_domain.process(command, asynchronous=False)
    except (ValidationError, errors.NotFoundError) as exc:
        error["exc"] = exc


def review_key(world, author, title):
    return watch_key(world["users"][author], world["movies"][title])


def _add_user(world, name, role):
    user = User(username=name, email=f"{name}@films.test", role=role)
    current_domain.repository_for(User).add(user)
    world["users"][name] = str(user.id)


def _watch(world, name, title):
    process(MarkMovieWatched(user_id=world["users"][name], movie_id=world["movies"][title]))


def _write_review(world, author, title, error=None):
    return process(
        CreateReview(
            user_id=world["users"][author],
            movie_id=world["movies"][title],
            content=f"{author} on {title}",
            direction_score=4,
            screenplay_score=4,
            cinematography_score=4,
            general_score=4,
        ),
        error,
    )


def flag_by_others(world, count, author, title):
    review_id = review_key(world, author, title)
    for i in range(count):
        name = f"flagger{i}"
        _add_user(world, name, "Member")
        process(FlagReview(review_id=review_id, reporter_id=world["users"][name]))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a member "{name}"'))
def a_member(world, name):
    _add_user(world, name, "Member")


@given(parsers.cfparse('an admin "{name}"'))
def an_admin(world, name):
    _add_user(world, name, "Admin")


@given(parsers.cfparse('a movie "{title}"'))
def a_movie(world, title):
    movie = Movie(title=title, release_year=1979)
    current_domain.repository_for(Movie).add(movie)
    world["movies"][title] = str(movie.id)


@given(parsers.cfparse('"{name}" has watched "{title}"'))
def has_watched_movie(world, name, title):
    _watch(world, name, title)


@given(parsers.cfparse('"{name}" has reviewed "{title}"'))
def has_reviewed_movie(world, name, title):
    _watch(world, name, title)
    _write_review(world, name, title)


@given(parsers.cfparse('{count:d} other members flagged the review of "{author}" for "{title}"'))
def others_flagged(world, count, author, title):
    flag_by_others(world, count, author, title)


@given(parsers.cfparse('"{name}" flagged the review of "{author}" for "{title}"'))
def member_flagged(world, name, author, title):
    process(FlagReview(review_id=review_key(world, author, title), reporter_id=world["users"][name]))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{name}" reviews "{title}"'))
def member_reviews(world, name, title, error):
    _write_review(world, name, title, error)


@when(parsers.cfparse('{count:d} other members flag the review of "{author}" for "{title}"'))
def others_flag(world, count, author, title):
    flag_by_others(world, count, author, title)


@when(parsers.cfparse('"{name}" flags the review of "{author}" for "{title}"'))
def member_flags(world, name, author, title, error):
    process(FlagReview(review_id=review_key(world, author, title), reporter_id=world["users"][name]), error)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the review action fails with a "{kind}"'))
def review_action_fails(error, kind):
    assert error["exc"] is not None, f"Expected a {kind} but none was raised"
    assert isinstance(error["exc"], getattr(errors, kind))


@then(parsers.cfparse('the review of "{author}" for "{title}" is visible'))
def review_is_visible(world, author, title):
    assert current_domain.repository_for(Review).get(review_key(world, author, title)).hidden is False


@then(parsers.cfparse('the review of "{author}" for "{title}" is hidden'))
def review_is_hidden(world, author, title):
    assert current_domain.repository_for(Review).get(review_key(world, author, title)).hidden is True


@then(parsers.cfparse('the review of "{author}" for "{title}" has {count:d} flags'))
def review_has_flags(world, author, title, count):
    assert current_domain.repository_for(Review).get(review_key(world, author, title)).flag_count == count


@then(parsers.cfparse('there is no review of "{author}" for "{title}"'))
def no_review(world, author, title):
    assert current_domain.repository_for(Review).find(review_key(world, author, title)) is None


@then(parsers.cfparse('no review of "{author}" is listed for "{title}"'))
def review_not_listed(world, author, title):
    listed = {r.review_id for r in reviews_for_movie(world["movies"][title]).items}
    assert review_key(world, author, title) not in listed


@then(parsers.cfparse('"{name}" has watched "{title}"'))
def still_watched(world, name, title):
    assert has_watched(world["users"][name], world["movies"][title])
