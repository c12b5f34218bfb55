"""Value types shared by the TMDb client, session store and formatter."""

from dataclasses import dataclass
from typing import Any, Optional

from config import YOUTUBE_WATCH_URL


@dataclass(frozen=True)
class Movie:
    id: int
    title: str
    rating: float = 0.0
    release_date: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None

    @property
    def year(self) -> Optional[str]:
        """Release year taken from a YYYY-MM-DD date, if present."""
        if not self.release_date:
            return None
        year = self.release_date.split("-")[0].strip()
        return year or None

    @classmethod
    def from_tmdb(cls, data: dict) -> "Movie":
        """Build a Movie from a TMDb search/discover result."""
        movie_id = data.get("id")
        if movie_id is None:
            raise ValueError("movie result has no id")
        return cls(
            id=int(movie_id),
            title=data.get("title") or data.get("original_title") or "Unknown",
            rating=float(data.get("vote_average") or 0.0),
            release_date=data.get("release_date") or None,
            overview=data.get("overview") or None,
            poster_path=data.get("poster_path") or None,
        )


@dataclass(frozen=True)
class Video:
    key: str
    site: str
    type: str
    name: Optional[str] = None

    @property
    def is_trailer(self) -> bool:
        return self.type in ("Trailer", "Teaser") and self.site == "YouTube"

    @property
    def url(self) -> str:
        return f"{YOUTUBE_WATCH_URL}{self.key}"

    @classmethod
    def from_tmdb(cls, data: dict) -> "Video":
        key = data.get("key")
        if not key:
            raise ValueError("video result has no key")
        return cls(
            key=str(key),
            site=data.get("site") or "",
            type=data.get("type") or "",
            name=data.get("name"),
        )


@dataclass
class Reply:
    """One outbound message: text or photo with caption, optionally with buttons."""

    text: str
    photo: Optional[str] = None
    reply_markup: Any = None
    parse_mode: Optional[str] = "Markdown"
