"""Read-only lookups against the user directory and the movie catalog."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from filmcatalog.directory.movie import Movie
from filmcatalog.directory.user import User
from filmcatalog.shared.errors import ForbiddenError, NotFoundError, not_found


def find_user(user_id) -> User:
    try:
        return current_domain.repository_for(User).get(str(user_id))
    except ObjectNotFoundError as exc:
        raise not_found("user", user_id) from exc


def find_user_by_username(username) -> User:
    user = current_domain.repository_for(User).find_by_username(username)
    if user is None:
        raise NotFoundError({"user": [f"No user with username `{username}`"]})
    return user


def user_exists(user_id) -> bool:
    try:
        find_user(user_id)
    except NotFoundError:
        return False
    return True


def find_movie(movie_id) -> Movie:
    try:
        return current_domain.repository_for(Movie).get(str(movie_id))
    except ObjectNotFoundError as exc:
        raise not_found("movie", movie_id) from exc


def movie_exists(movie_id) -> bool:
    try:
        find_movie(movie_id)
    except NotFoundError:
        return False
    return True


def is_admin(user_id) -> bool:
    """True when ``user_id`` names an existing admin. Unknown ids are not admins."""
    if user_id is None:
        return False
    try:
        return find_user(user_id).is_admin
    except NotFoundError:
        return False


def require_admin(user_id, action: str) -> User:
    """Return the admin user or raise; ``NotFoundError`` for unknown ids."""
    user = find_user(user_id)
    if not user.is_admin:
        raise ForbiddenError({"moderator_id": [f"Only admins can {action}"]})
    return user
