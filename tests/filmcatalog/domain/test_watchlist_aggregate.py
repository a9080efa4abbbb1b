import pytest
from protean.exceptions import ValidationError

from filmcatalog.shared.errors import ConflictError, PreconditionFailedError
from filmcatalog.watchlist.events import (
    MovieAddedToWatchlist,
    WatchlistCleared,
    WatchlistCreated,
    WatchlistMovieWatched,
)
from filmcatalog.watchlist.watchlist import DEFAULT_WATCHLIST_NAME, Watchlist


def _watchlist(**overrides):
    defaults = {"owner_id": "u-1", "name": "Tarkovsky"}
    defaults.update(overrides)
    return Watchlist.create(**defaults)


class TestCreateWatchlist:
    def test_default_name(self):
        watchlist = Watchlist.create(owner_id="u-1")
        assert watchlist.name == DEFAULT_WATCHLIST_NAME
        assert any(isinstance(e, WatchlistCreated) for e in watchlist._events)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _watchlist(name="  ")
        assert "name" in exc.value.messages

    def test_ownership(self):
        watchlist = _watchlist()
        assert watchlist.is_owned_by("u-1")
        assert not watchlist.is_owned_by("u-2")


class TestWatchlistEntries:
    def test_add_creates_unwatched_entry(self):
        watchlist = _watchlist()
        assert watchlist.add_movie("m-1") is True

        entry = watchlist.entry_for("m-1")
        assert entry.watched is False
        assert entry.added_at is not None
        assert any(isinstance(e, MovieAddedToWatchlist) for e in watchlist._events)

    def test_adding_twice_keeps_one_entry(self):
        watchlist = _watchlist()
        watchlist.add_movie("m-1")
        assert watchlist.add_movie("m-1") is False
        assert len(watchlist.entries) == 1

    def test_remove_absent_movie_is_noop(self):
        watchlist = _watchlist()
        assert watchlist.remove_movie("m-404") is False

    def test_remove_all(self):
        watchlist = _watchlist()
        watchlist.add_movie("m-1")
        watchlist.add_movie("m-2")

        assert watchlist.remove_all() == 2
        assert watchlist.entries == []
        assert any(isinstance(e, WatchlistCleared) for e in watchlist._events)

    def test_contains_movie(self):
        watchlist = _watchlist()
        watchlist.add_movie("m-1")
        assert watchlist.contains_movie("m-1")
        assert not watchlist.contains_movie("m-2")


class TestMarkWatched:
    def test_marks_entry_watched(self):
        watchlist = _watchlist()
        watchlist.add_movie("m-1")

        watchlist.mark_watched("m-1")

        entry = watchlist.entry_for("m-1")
        assert entry.watched is True
        assert entry.watched_at is not None
        assert any(isinstance(e, WatchlistMovieWatched) for e in watchlist._events)

    def test_movie_not_in_list_fails(self):
        watchlist = _watchlist()
        with pytest.raises(PreconditionFailedError):
            watchlist.mark_watched("m-1")

    def test_already_watched_fails(self):
        watchlist = _watchlist()
        watchlist.add_movie("m-1")
        watchlist.mark_watched("m-1")
        with pytest.raises(ConflictError):
            watchlist.mark_watched("m-1")

    def test_remove_and_add_resets_watched(self):
        watchlist = _watchlist()
        watchlist.add_movie("m-1")
        watchlist.mark_watched("m-1")

        watchlist.remove_movie("m-1")
        watchlist.add_movie("m-1")

        assert watchlist.entry_for("m-1").watched is False
