"""TMDb API client for movie data retrieval."""

from typing import Any, Dict, List, Optional

import httpx

from config import TMDB_API_KEY, TMDB_BASE_URL, TMDB_TIMEOUT, logger
from errors import ProviderError
from models import Movie, Video


async def _get(operation: str, path: str, params: Optional[Dict[str, Any]] = None) -> dict:
    """
    GET a TMDb endpoint and return the decoded JSON body.

    Raises:
        ProviderError: on network failure, timeout, non-2xx status or invalid JSON
    """
    query = dict(params or {})
    query["api_key"] = TMDB_API_KEY

    try:
        async with httpx.AsyncClient(timeout=TMDB_TIMEOUT) as client:
            response = await client.get(f"{TMDB_BASE_URL}{path}", params=query)
    except httpx.TimeoutException as e:
        logger.error(f"TMDb {operation} timed out after {TMDB_TIMEOUT}s: {e!r}")
        raise ProviderError(operation, "request timed out") from e
    except httpx.HTTPError as e:
        logger.error(f"TMDb {operation} request failed: {e!r}")
        raise ProviderError(operation, f"network error: {e.__class__.__name__}") from e

    if not response.is_success:
        logger.error(f"TMDb {operation} returned HTTP {response.status_code}: {response.text[:200]}")
        raise ProviderError(operation, f"HTTP {response.status_code}", status_code=response.status_code)

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"TMDb {operation} returned invalid JSON: {e}")
        raise ProviderError(operation, "invalid JSON payload") from e

    if not isinstance(data, dict):
        logger.error(f"TMDb {operation} returned unexpected payload type {type(data).__name__}")
        raise ProviderError(operation, "unexpected payload")
    return data


def _results(operation: str, data: dict) -> List[dict]:
    results = data.get("results")
    if not isinstance(results, list) or not all(isinstance(item, dict) for item in results):
        logger.error(f"TMDb {operation} payload has no usable 'results' list")
        raise ProviderError(operation, "malformed results")
    return results


def _parse(operation: str, results: List[dict], factory) -> list:
    try:
        return [factory(item) for item in results]
    except (TypeError, ValueError) as e:
        logger.error(f"TMDb {operation} returned a malformed entry: {e}")
        raise ProviderError(operation, f"malformed entry: {e}") from e


async def discover_by_genre(genre_id: int, page: int = 1) -> List[Movie]:
    """
    Discover popular movies in a genre.

    Returns:
        Movies in provider order; may be empty
    """
    params = {
        "with_genres": genre_id,
        "sort_by": "popularity.desc",
        "page": page,
    }
    data = await _get("discover", "/discover/movie", params)
    movies = _parse("discover", _results("discover", data), Movie.from_tmdb)
    logger.info(f"Discover API found {len(movies)} movies for genre {genre_id} (page {page})")
    return movies


async def search_by_title(query: str) -> List[Movie]:
    """
    Search movies by title.

    Returns:
        Movies in TMDb relevance order; empty if nothing matched
    """
    data = await _get("search", "/search/movie", {"query": query})
    movies = _parse("search", _results("search", data), Movie.from_tmdb)
    logger.info(f"Search for {query!r} returned {len(movies)} movies")
    return movies


async def list_videos(movie_id: int) -> List[Video]:
    """List videos (trailers, teasers, clips...) attached to a movie."""
    data = await _get("videos", f"/movie/{int(movie_id)}/videos")
    videos = []
    for item in _results("videos", data):
        try:
            videos.append(Video.from_tmdb(item))
        except ValueError as e:
            logger.warning(f"Skipping video entry for movie {movie_id}: {e}")
    return videos


def pick_trailer(videos: List[Video]) -> Optional[Video]:
    """First YouTube trailer or teaser, or None."""
    return next((video for video in videos if video.is_trailer), None)
