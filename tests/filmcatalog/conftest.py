import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def filmcatalog_bed():
    from filmcatalog.domain import filmcatalog

    bed = DomainFixture(filmcatalog)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(filmcatalog_bed, monkeypatch):
    monkeypatch.delenv("AUTO_HIDE_THRESHOLD", raising=False)

    with filmcatalog_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        for _, broker in current_domain.brokers.items():
            broker._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Directory seeding
# ---------------------------------------------------------------------------
def add_user(username, role="Member"):
    from filmcatalog.directory.user import User

    user = User(username=username, email=f"{username}@films.test", name=username.title(), role=role)
    current_domain.repository_for(User).add(user)
    return str(user.id)


def add_movie(title="Stalker", release_year=1979):
    from filmcatalog.directory.movie import Movie

    movie = Movie(
        title=title,
        synopsis=f"{title} synopsis",
        release_year=release_year,
        duration_minutes=120,
        content_rating="PG",
        genres='["Drama"]',
    )
    current_domain.repository_for(Movie).add(movie)
    return str(movie.id)


@pytest.fixture
def alice():
    return add_user("alice")


@pytest.fixture
def bob():
    return add_user("bob")


@pytest.fixture
def admin():
    return add_user("moderator", role="Admin")


@pytest.fixture
def movie():
    return add_movie()


@pytest.fixture
def make_user():
    return add_user


@pytest.fixture
def make_movie():
    return add_movie


@pytest.fixture
def alice_review(alice, movie):
    """Alice has watched ``movie`` and reviewed it. Returns the review id."""
    from filmcatalog.review.submission import CreateReview
    from filmcatalog.watch.tracking import MarkMovieWatched

    current_domain.process(MarkMovieWatched(user_id=alice, movie_id=movie), asynchronous=False)
    return current_domain.process(
        CreateReview(
            user_id=alice,
            movie_id=movie,
            content="Slow, hypnotic and unforgettable.",
            direction_score=5,
            screenplay_score=4,
            cinematography_score=5,
            general_score=5,
        ),
        asynchronous=False,
    )


@pytest.fixture
def flaggers(make_user):
    """Factory creating ``n`` distinct reporters."""

    def _make(n, prefix="reporter"):
        return [make_user(f"{prefix}{i}") for i in range(n)]

    return _make
