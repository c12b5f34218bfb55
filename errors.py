"""Exceptions raised by the Movie Trailer Bot."""

from typing import List, Optional


class FatalConfig(ValueError):
    """A required setting is missing; the bot refuses to start."""


class UnknownGenre(LookupError):
    """Genre name is not in the registry."""

    def __init__(self, name: str, valid_names: List[str]):
        self.name = name
        self.valid_names = valid_names
        super().__init__(f"Unknown genre: {name!r}")


class NotFound(LookupError):
    """Search returned nothing."""


class ProviderError(Exception):
    """TMDb request failed or returned an unusable payload."""

    def __init__(self, operation: str, detail: str, status_code: Optional[int] = None):
        self.operation = operation
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{operation} failed: {detail}")


class SessionNotFound(KeyError):
    """No recommendation session exists for the chat."""

    def __init__(self, chat_id: int):
        self.chat_id = chat_id
        super().__init__(chat_id)
