"""Parsing of bot commands and navigation button payloads."""

import enum
from dataclasses import dataclass
from typing import Optional


class CommandKind(enum.Enum):
    START = "start"
    TRAILER = "trailer"
    RECOMMEND = "recommend"


# Commands that do nothing without an argument
_NEEDS_ARGUMENT = {CommandKind.TRAILER, CommandKind.RECOMMEND}


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    argument: str = ""


class NavDirection(enum.Enum):
    NEXT = "next"
    PREV = "prev"

    @property
    def callback_data(self) -> str:
        return f"{NAV_PREFIX}{self.value}"


NAV_PREFIX = "nav:"
NAV_CALLBACK_PATTERN = r"^nav:(next|prev)$"


def parse_command(text: Optional[str]) -> Optional[Command]:
    """
    Parse "/keyword [argument]" into a Command.

    The keyword is case-sensitive and may carry an "@BotName" suffix.
    Returns None for anything that is not a recognized, complete command.
    """
    if not text or not text.startswith("/"):
        return None

    parts = text.strip().split(None, 1)
    keyword = parts[0][1:].split("@", 1)[0]
    try:
        kind = CommandKind(keyword)
    except ValueError:
        return None

    argument = parts[1].strip() if len(parts) > 1 else ""
    if kind in _NEEDS_ARGUMENT and not argument:
        return None
    return Command(kind, argument)


def parse_nav_callback(data: Optional[str]) -> Optional[NavDirection]:
    """Map "nav:next" / "nav:prev" to a NavDirection, else None."""
    if not data or not data.startswith(NAV_PREFIX):
        return None
    try:
        return NavDirection(data[len(NAV_PREFIX):])
    except ValueError:
        return None
