"""In-memory per-chat pagination state for genre recommendations."""

import asyncio
import math
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from commands import NavDirection
from config import PAGE_SIZE, SESSION_IDLE_TIMEOUT, logger
from errors import SessionNotFound
from models import Movie


@dataclass
class Session:
    genre_id: Optional[int]
    results: Tuple[Movie, ...]
    page: int = 0
    touched_at: float = 0.0

    def page_count(self, page_size: int) -> int:
        return math.ceil(len(self.results) / page_size)


class SessionStore:
    """
    Last recommendation result set and current page, one per chat.

    Pages are zero-based. NEXT can move one page past the last real page,
    where the slice is empty; PREV never goes below page 0.
    """

    def __init__(self, page_size: int = PAGE_SIZE, idle_timeout: Optional[float] = SESSION_IDLE_TIMEOUT):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.idle_timeout = idle_timeout
        self._sessions: Dict[int, Session] = {}
        self._locks: Dict[int, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, chat_id: int) -> bool:
        return chat_id in self._sessions

    def get(self, chat_id: int) -> Optional[Session]:
        return self._sessions.get(chat_id)

    def lock(self, chat_id: int) -> asyncio.Lock:
        """Lock serializing navigation for one chat."""
        if chat_id not in self._locks:
            self._locks[chat_id] = asyncio.Lock()
        return self._locks[chat_id]

    def start_session(self, chat_id: int, genre_id: Optional[int], results: Sequence[Movie]) -> Session:
        """Replace the chat's session with a fresh one on the first page."""
        self.evict_idle()
        session = Session(genre_id=genre_id, results=tuple(results), touched_at=time.monotonic())
        self._sessions[chat_id] = session
        logger.debug(f"Started session for chat {chat_id}: genre {genre_id}, {len(session.results)} results")
        return session

    def _require(self, chat_id: int) -> Session:
        session = self._sessions.get(chat_id)
        if session is None:
            raise SessionNotFound(chat_id)
        session.touched_at = time.monotonic()
        return session

    def _slice(self, session: Session) -> List[Movie]:
        start = session.page * self.page_size
        return list(session.results[start:start + self.page_size])

    def current_slice(self, chat_id: int) -> List[Movie]:
        return self._slice(self._require(chat_id))

    def advance(self, chat_id: int, direction: NavDirection) -> Tuple[int, List[Movie]]:
        """
        Move the chat's page and return (page, movies on that page).

        Raises:
            SessionNotFound: if the chat has no session
        """
        session = self._require(chat_id)
        if direction is NavDirection.NEXT:
            # page_count() is the exhausted page: empty slice
            if session.page < session.page_count(self.page_size):
                session.page += 1
        elif direction is NavDirection.PREV:
            if session.page > 0:
                session.page -= 1
        else:
            raise ValueError(f"Unknown direction: {direction!r}")
        return session.page, self._slice(session)

    def evict_idle(self) -> int:
        """Drop sessions idle longer than idle_timeout. Returns how many were dropped."""
        if self.idle_timeout is None:
            return 0
        cutoff = time.monotonic() - self.idle_timeout
        stale = [chat_id for chat_id, s in self._sessions.items() if s.touched_at < cutoff]
        for chat_id in stale:
            del self._sessions[chat_id]
            lock = self._locks.get(chat_id)
            if lock is not None and not lock.locked():
                del self._locks[chat_id]
        if stale:
            logger.info(f"Evicted {len(stale)} idle sessions")
        return len(stale)
