"""Message formatting for movie captions, result pages and navigation buttons."""

import re
from typing import List, Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from telegram.helpers import escape_markdown

from commands import NavDirection
from config import TMDB_IMAGE_BASE_URL, RECOMMEND_OVERVIEW_LIMIT, logger
from models import Movie, Reply, Video

NO_MORE_RESULTS = "❌ No more results."
TRAILER_NOT_FOUND = "❌ Trailer not found."
NO_OVERVIEW = "No description available."
YEAR_PLACEHOLDER = "N/A"

_POSTER_PATH = re.compile(r'^/[a-zA-Z0-9_\-/]+\.(jpg|jpeg|png|webp)$', re.IGNORECASE)


def truncate(text: str, limit: int) -> str:
    """Cut text to at most limit characters, adding "..." when something was cut."""
    if limit < 1:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def build_poster_url(poster_path: Optional[str]) -> str:
    """
    Validate and build a proper TMDb poster URL.
    Returns empty string if poster_path is missing or invalid.
    """
    if not poster_path:
        return ""

    poster_path = str(poster_path).strip()
    if not poster_path.startswith("/"):
        poster_path = "/" + poster_path

    if not _POSTER_PATH.match(poster_path):
        logger.warning(f"Invalid poster_path format: {poster_path[:50]}")
        return ""

    return f"{TMDB_IMAGE_BASE_URL}{poster_path}"


def format_caption(
    movie: Movie,
    overview_limit: int = RECOMMEND_OVERVIEW_LIMIT,
    trailer: Optional[Video] = None,
    include_trailer: bool = False,
) -> str:
    """Markdown caption: title and year, rating, overview and optionally a trailer line."""
    title = escape_markdown(movie.title, version=1)
    year = movie.year or YEAR_PLACEHOLDER
    overview = truncate(movie.overview, overview_limit) if movie.overview else NO_OVERVIEW

    lines = [
        f"🎬 *{title}* ({year})",
        f"⭐ *Rating:* {movie.rating:.1f}/10",
        f"📝 {escape_markdown(overview, version=1)}",
    ]
    if include_trailer:
        lines.append("")
        if trailer:
            lines.append(f"🔗 [Watch Trailer]({trailer.url})")
        else:
            lines.append(TRAILER_NOT_FOUND)
    return "\n".join(lines)


def render_movie(movie: Movie, caption: str) -> Reply:
    """Photo reply when the movie has a usable poster, text-only otherwise."""
    poster_url = build_poster_url(movie.poster_path)
    return Reply(text=caption, photo=poster_url or None)


def navigation_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([[
        InlineKeyboardButton("⏮️ Prev", callback_data=NavDirection.PREV.callback_data),
        InlineKeyboardButton("⏭️ Next", callback_data=NavDirection.NEXT.callback_data),
    ]])


def render_page(movies: List[Movie], page: int, overview_limit: int = RECOMMEND_OVERVIEW_LIMIT) -> List[Reply]:
    """
    Replies for one page of recommendations.

    Args:
        movies: movies on the page
        page: zero-based page index, shown one-based

    Returns:
        One reply per movie followed by a "Page N" reply with Prev/Next buttons,
        or a single "no more results" reply for an empty page
    """
    if not movies:
        return [Reply(text=NO_MORE_RESULTS, parse_mode=None)]

    replies = [render_movie(movie, format_caption(movie, overview_limit)) for movie in movies]
    replies.append(Reply(text=f"Page {page + 1}", reply_markup=navigation_keyboard(), parse_mode=None))
    return replies
