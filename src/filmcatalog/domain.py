"""Film Catalog bounded context — watched records, reviews, moderation and watchlists.

A review can only be written for a movie the author has watched, and it shares
the (user, movie) identity of that watched record. Other users flag reviews;
once the flag count reaches the configured threshold the review is hidden
automatically, and admins can hide or unhide it explicitly. Users and movies
belong to external directories and are only read here.
"""

from protean.domain import Domain

from filmcatalog.utils.logging import configure_logging

configure_logging()

filmcatalog = Domain(name="filmcatalog")
