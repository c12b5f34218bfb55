from __future__ import annotations

from types import SimpleNamespace
from typing import Any, List

from models import Movie


def make_movie(i: int, **overrides: Any) -> Movie:
    fields = dict(
        id=i,
        title=f"Movie {i}",
        rating=7.0,
        release_date="2020-01-01",
        overview=f"Overview {i}",
        poster_path=f"/poster{i}.jpg",
    )
    fields.update(overrides)
    return Movie(**fields)


def make_movies(n: int) -> List[Movie]:
    return [make_movie(i) for i in range(1, n + 1)]


class FakeBot:
    def __init__(self, photo_error: Exception | None = None):
        self.sent: List[dict] = []
        self.actions: List[dict] = []
        self.photo_error = photo_error

    async def send_message(self, **kwargs):
        self.sent.append({"method": "send_message", **kwargs})

    async def send_photo(self, **kwargs):
        if self.photo_error is not None:
            raise self.photo_error
        self.sent.append({"method": "send_photo", **kwargs})

    async def send_chat_action(self, **kwargs):
        self.actions.append(kwargs)


class FakeMessage:
    def __init__(self, text: str):
        self.text = text
        self.replies: List[dict] = []

    async def reply_text(self, text, **kwargs):
        self.replies.append({"text": text, **kwargs})


class FakeCallbackQuery:
    def __init__(self, data: str):
        self.data = data
        self.answers: List[Any] = []

    async def answer(self, text=None, **kwargs):
        self.answers.append(text)


def make_context(bot: FakeBot | None = None, bot_data: dict | None = None):
    return SimpleNamespace(bot=bot or FakeBot(), bot_data={} if bot_data is None else bot_data, error=None)


def make_command_update(text: str, chat_id: int = 42, first_name: str | None = "Ana"):
    message = FakeMessage(text)
    return SimpleNamespace(
        effective_message=message,
        message=message,
        effective_chat=SimpleNamespace(id=chat_id),
        effective_user=SimpleNamespace(first_name=first_name),
    )


def make_callback_update(data: str, chat_id: int = 42):
    return SimpleNamespace(
        callback_query=FakeCallbackQuery(data),
        effective_chat=SimpleNamespace(id=chat_id),
        effective_message=None,
        effective_user=SimpleNamespace(first_name="Ana"),
    )
