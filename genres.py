"""Genre name to TMDb genre id lookup."""

import re
from typing import List

from config import GENRE_MAP, GENRE_ALIASES
from errors import UnknownGenre

_SEPARATORS = re.compile(r"[-\s]+")


def normalize_genre(name: str) -> str:
    """Lower-case a genre name and drop whitespace and hyphens ("Sci-Fi" -> "scifi")."""
    return _SEPARATORS.sub("", name or "").lower()


_REGISTRY = {normalize_genre(name): genre_id for name, genre_id in GENRE_MAP.items()}
_REGISTRY.update({
    normalize_genre(alias): GENRE_MAP[canonical]
    for alias, canonical in GENRE_ALIASES.items()
})


def genre_names() -> List[str]:
    """Canonical genre names, in the order they are shown to users."""
    return list(GENRE_MAP)


def resolve_genre(name: str) -> int:
    """Get TMDb genre ID from a user-supplied genre name."""
    genre_id = _REGISTRY.get(normalize_genre(name))
    if genre_id is None:
        raise UnknownGenre(name, genre_names())
    return genre_id
