"""Telegram bot handlers for commands and navigation button callbacks."""

from typing import List, Optional

from telegram import Update
from telegram.constants import ChatAction, ParseMode
from telegram.error import BadRequest, TelegramError
from telegram.ext import ContextTypes
from telegram.helpers import escape_markdown

from commands import CommandKind, parse_command, parse_nav_callback
from config import TRAILER_OVERVIEW_LIMIT, UNKNOWN_COMMAND_HINT, logger
from errors import NotFound, ProviderError, SessionNotFound, UnknownGenre
from formatting import format_caption, render_movie, render_page
from genres import genre_names, resolve_genre
from models import Reply
from sessions import SessionStore
from tmdb_client import discover_by_genre, list_videos, pick_trailer, search_by_title

SESSIONS_KEY = "sessions"

MOVIE_NOT_FOUND = "❌ Movie not found."
TRAILER_ERROR = "⚠️ Error fetching trailer. Please try again later."
RECOMMEND_ERROR = "⚠️ Error fetching recommendations. Please try again later."
SESSION_EXPIRED = "These results have expired. Send /recommend <genre> to start again."
UNKNOWN_COMMAND = "🤔 I don't know that command. Send /start to see what I can do."
SEND_FAILED = "Sorry, I couldn't send one of the movies. Please try again."


def get_session_store(context: ContextTypes.DEFAULT_TYPE) -> SessionStore:
    """Session store shared through bot_data; created on first use."""
    store = context.bot_data.get(SESSIONS_KEY)
    if store is None:
        store = SessionStore()
        context.bot_data[SESSIONS_KEY] = store
    return store


def unknown_genre_message(valid_names) -> str:
    return f"❌ Unknown genre. Try: {', '.join(valid_names)}"


async def send_reply(bot, chat_id: int, reply: Reply) -> None:
    """Send a Reply, falling back to text when Telegram rejects the photo
    and to plain text when it rejects the Markdown."""
    if reply.photo:
        try:
            await bot.send_photo(
                chat_id=chat_id,
                photo=reply.photo,
                caption=reply.text,
                reply_markup=reply.reply_markup,
                parse_mode=reply.parse_mode
            )
            return
        except TelegramError as e:
            logger.warning(f"Error sending photo: {e}, sending text only")

    try:
        await bot.send_message(
            chat_id=chat_id,
            text=reply.text,
            reply_markup=reply.reply_markup,
            parse_mode=reply.parse_mode
        )
    except BadRequest as e:
        if reply.parse_mode is None:
            raise
        logger.warning(f"Telegram rejected formatted text: {e}, sending plain text")
        await bot.send_message(
            chat_id=chat_id,
            text=reply.text,
            reply_markup=reply.reply_markup,
            parse_mode=None
        )


async def send_replies(bot, chat_id: int, replies: List[Reply]) -> None:
    """Send replies in order; a reply Telegram refuses is replaced by an apology."""
    for reply in replies:
        try:
            await send_reply(bot, chat_id, reply)
        except TelegramError as e:
            logger.error(f"Error sending reply to chat {chat_id}: {e}")
            try:
                await bot.send_message(chat_id=chat_id, text=SEND_FAILED)
            except TelegramError as e2:
                logger.error(f"Error sending apology to chat {chat_id}: {e2}")


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE, argument: str = "") -> None:
    """Handle /start command."""
    user = update.effective_user
    first_name = escape_markdown(user.first_name, version=1) if user and user.first_name else "there"
    genres = ", ".join(genre_names())
    welcome_message = (
        f"👋 *Hi {first_name}!*\n\n"
        "Welcome to *🎬 MovieBot*, your personal movie assistant.\n\n"
        "🎞️ */trailer <movie name>*\n"
        "_Get the official trailer, rating, overview & poster._\n\n"
        "🍿 */recommend <genre>*\n"
        "_Discover popular movies in your favorite genre._\n\n"
        f"💡 *Available genres:*\n_{genres}_\n\n"
        "📌 *Examples:*\n"
        "`/trailer Dune Part Two`\n"
        "`/recommend scifi`"
    )
    await update.effective_message.reply_text(welcome_message, parse_mode=ParseMode.MARKDOWN)


async def trailer(update: Update, context: ContextTypes.DEFAULT_TYPE, title: str) -> None:
    """Handle /trailer <title>: best search match with its trailer link."""
    chat_id = update.effective_chat.id
    await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)

    try:
        movies = await search_by_title(title)
        if not movies:
            raise NotFound(title)
        movie = movies[0]
        video = pick_trailer(await list_videos(movie.id))
    except NotFound:
        logger.info(f"No movie found for {title!r}")
        await context.bot.send_message(chat_id=chat_id, text=MOVIE_NOT_FOUND)
        return
    except ProviderError as e:
        logger.error(f"Trailer error for {title!r}: {e}")
        await context.bot.send_message(chat_id=chat_id, text=TRAILER_ERROR)
        return

    if video is None:
        logger.info(f"No YouTube trailer for movie {movie.id} ({movie.title})")

    caption = format_caption(movie, TRAILER_OVERVIEW_LIMIT, trailer=video, include_trailer=True)
    await send_replies(context.bot, chat_id, [render_movie(movie, caption)])
    logger.info(f"Sent trailer for {movie.title} (ID: {movie.id})")


async def recommend(update: Update, context: ContextTypes.DEFAULT_TYPE, genre: str) -> None:
    """Handle /recommend <genre>: start a new session and send its first page."""
    chat_id = update.effective_chat.id

    try:
        genre_id = resolve_genre(genre)
    except UnknownGenre as e:
        logger.info(f"Unknown genre {genre!r} from chat {chat_id}")
        await context.bot.send_message(chat_id=chat_id, text=unknown_genre_message(e.valid_names))
        return

    await context.bot.send_chat_action(chat_id=chat_id, action=ChatAction.TYPING)
    try:
        movies = await discover_by_genre(genre_id, page=1)
    except ProviderError as e:
        logger.error(f"Recommend error for genre {genre_id}: {e}")
        await context.bot.send_message(chat_id=chat_id, text=RECOMMEND_ERROR)
        return

    store = get_session_store(context)
    async with store.lock(chat_id):
        session = store.start_session(chat_id, genre_id, movies)
        await send_replies(context.bot, chat_id, render_page(store.current_slice(chat_id), session.page))


COMMAND_HANDLERS = {
    CommandKind.START: start,
    CommandKind.TRAILER: trailer,
    CommandKind.RECOMMEND: recommend,
}


async def handle_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Route a command message to its handler; unrecognized commands are ignored."""
    message = update.effective_message
    if message is None or not message.text:
        return

    command = parse_command(message.text)
    if command is None:
        logger.debug(f"Ignoring unrecognized input: {message.text[:50]!r}")
        if UNKNOWN_COMMAND_HINT:
            await message.reply_text(UNKNOWN_COMMAND)
        return

    logger.info(f"/{command.kind.value} from chat {update.effective_chat.id}")
    await COMMAND_HANDLERS[command.kind](update, context, command.argument)


async def handle_navigation(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle Prev/Next buttons under a recommendations page."""
    query = update.callback_query
    chat_id = update.effective_chat.id
    direction = parse_nav_callback(query.data)
    store = get_session_store(context)

    if direction is None or chat_id not in store:
        notice: Optional[str] = SESSION_EXPIRED if direction else None
        await query.answer(text=notice)
        return

    await query.answer()
    async with store.lock(chat_id):
        try:
            page, movies = store.advance(chat_id, direction)
        except SessionNotFound:
            logger.info(f"Session for chat {chat_id} vanished before navigation")
            return
        await send_replies(context.bot, chat_id, render_page(movies, page))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors that escaped the handlers."""
    logger.error(f"Error handling update {update}: {context.error}", exc_info=context.error)
