"""Movie — catalog entry referenced by watched records, reviews and watchlists."""

import json
from enum import Enum

from protean.fields import Integer, String, Text

from filmcatalog.domain import filmcatalog


class ContentRating(Enum):
    G = "G"
    PG = "PG"
    PG_13 = "PG-13"
    R = "R"
    NC_17 = "NC-17"


@filmcatalog.aggregate
class Movie:
    title = String(required=True, max_length=255)
    synopsis = Text()
    release_year = Integer(min_value=1888)
    duration_minutes = Integer(min_value=1)
    content_rating = String(choices=ContentRating)
    genres = Text()  # JSON array of genre names

    @property
    def genre_names(self) -> list[str]:
        return json.loads(self.genres) if self.genres else []
