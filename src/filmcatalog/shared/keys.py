"""Composite identities shared across the film catalog.

A watched record and its review are both identified by the (user, movie) pair,
and a flag by the (reporter, review) pair. The string forms below are what the
aggregates store as their identifier.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Identifier

from filmcatalog.domain import filmcatalog

WATCH_KEY_SEPARATOR = "::"
FLAG_KEY_SEPARATOR = "@"


def _reject_separator(field_name, value, separator):
    if value is not None and separator in str(value):
        raise ValidationError({field_name: [f"Identifier cannot contain `{separator}`"]})


@filmcatalog.value_object
class WatchKey:
    """Identity of a watched record and of the review written for it."""

    user_id = Identifier(required=True)
    movie_id = Identifier(required=True)

    @invariant.post
    def parts_must_not_contain_separator(self):
        _reject_separator("user_id", self.user_id, WATCH_KEY_SEPARATOR)
        _reject_separator("movie_id", self.movie_id, WATCH_KEY_SEPARATOR)

    @property
    def value(self) -> str:
        return f"{self.user_id}{WATCH_KEY_SEPARATOR}{self.movie_id}"

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    @classmethod
    def parse(cls, value: str) -> "WatchKey":
        user_id, sep, movie_id = str(value).partition(WATCH_KEY_SEPARATOR)
        if not sep or not user_id or not movie_id:
            raise ValidationError({"watch_key": [f"Malformed watch key `{value}`"]})
        return cls(user_id=user_id, movie_id=movie_id)


@filmcatalog.value_object
class FlagKey:
    """Identity of one reporter's flag on one review."""

    reporter_id = Identifier(required=True)
    review_id = Identifier(required=True)

    @invariant.post
    def reporter_must_not_contain_separator(self):
        _reject_separator("reporter_id", self.reporter_id, FLAG_KEY_SEPARATOR)

    @property
    def value(self) -> str:
        return f"{self.reporter_id}{FLAG_KEY_SEPARATOR}{self.review_id}"


def watch_key(user_id, movie_id) -> str:
    return WatchKey(user_id=str(user_id), movie_id=str(movie_id)).value


def flag_key(reporter_id, review_id) -> str:
    return FlagKey(reporter_id=str(reporter_id), review_id=str(review_id)).value
