"""Routing of tokenized messages to registered commands."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from commands.errors import CommandError, LockUnavailable
from commands.permissions import ensure_authorized
from commands.registry import CommandInfo, Registry, SettingInfo
from commands.responses import Response, TextResponse, CardResponse, Payload
from model.services import BotServices
from model.session import GameSessionKey, GameSessionState
from model.settings import GuildSettings
from utils.localization import Message

logger = logging.getLogger('discord')

CONFIRM_TOKEN = "confirm"

COULDNT_FIND_USER = Message(
    "commands.HandleCommand.couldntFindUser", "I couldn't find a user by that name or ID!")


# =============================================================================
# Context
# =============================================================================

@dataclass
class DispatchContext:
    """Everything a command handler gets to see about one invocation.

    ``args[0]`` is the command token as typed; the remaining items are its arguments.
    ``session`` is only set while the dispatcher holds the session lock.
    """
    author_id: int
    guild_id: int
    channel_id: int
    args: list[str]
    settings: GuildSettings
    services: BotServices
    is_admin: bool = False
    is_permissioned: bool = False
    message: Any = None
    commands: Optional[Registry[CommandInfo]] = None
    setting_registry: Optional[Registry[SettingInfo]] = None
    entry: Optional[CommandInfo] = None
    session: Optional[GameSessionState] = None
    _is_premium: Optional[bool] = field(default=None, repr=False)

    @property
    def key(self) -> GameSessionKey:
        return GameSessionKey(self.guild_id, self.channel_id)

    @property
    def arguments(self) -> list[str]:
        """Arguments after the command token."""
        return self.args[1:]

    @property
    def is_premium(self) -> bool:
        """Premium status of the guild, looked up on first use."""
        if self._is_premium is None:
            self._is_premium = self.services.stats.is_premium(self.guild_id)
        return self._is_premium

    def localize(self, message: Message, **params) -> str:
        return self.services.localizer.localize(message, self.settings.language, **params)

    def reply(self, payload: Payload) -> Response:
        return Response(self.channel_id, payload)

    def reply_text(self, message: Union[Message, str], **params) -> Response:
        text = message if isinstance(message, str) else self.localize(message, **params)
        return self.reply(TextResponse(text))

    def reply_card(self, embed) -> Response:
        return self.reply(CardResponse(embed))


# =============================================================================
# Argument helpers
# =============================================================================

def tokenize(content: str, prefix: str, bot_user_id: Optional[int] = None) -> Optional[list[str]]:
    """Split a message addressed to the bot into tokens.

    A message is addressed to the bot when it starts with the guild's prefix
    (case-insensitive) or with a mention of the bot.

    Returns:
        The tokens after the prefix (possibly empty), or None if the message isn't for the bot
    """
    stripped = content.strip()
    candidates = [prefix] if prefix else []
    if bot_user_id is not None:
        candidates += [f"<@{bot_user_id}>", f"<@!{bot_user_id}>"]

    for candidate in candidates:
        if stripped.lower().startswith(candidate.lower()):
            rest = stripped[len(candidate):]
            # the prefix has to be its own word when it ends in a letter, so ".aufoo" isn't ".au foo"
            if rest and not rest[0].isspace() and candidate[-1].isalnum():
                continue
            return rest.split()
    return None


def split_trailing_qualifier(tokens: Sequence[str], qualifiers: Sequence[str],
                             default: str) -> tuple[str, str]:
    """Separate an optional trailing qualifier from a space-joined primary argument.

    When the last token is one of ``qualifiers`` it is consumed as the qualifier and left out of
    the primary argument. Otherwise every token belongs to the primary argument and the qualifier
    is ``default``. A multi-word primary argument whose last word happens to be a qualifier
    keyword loses that word.

    Returns:
        ``(primary, qualifier)``
    """
    if tokens and tokens[-1].lower() in qualifiers:
        return " ".join(tokens[:-1]), tokens[-1].lower()
    return " ".join(tokens), default


def has_confirmation(args: Sequence[str], index: int) -> bool:
    """Whether ``args[index]`` is the final, literal ``confirm`` token of a destructive command."""
    return len(args) == index + 1 and args[index] == CONFIRM_TOKEN


# =============================================================================
# Dispatcher
# =============================================================================

class Dispatcher:
    """Resolves, authorizes and runs commands against per-channel game sessions."""

    def __init__(self, commands: Registry[CommandInfo], settings: Registry[SettingInfo], services: BotServices):
        self.commands = commands
        self.settings = settings
        self.services = services

    async def dispatch(self, entry: CommandInfo, ctx: DispatchContext) -> Response:
        """Run an entry's handler.

        Entries that mutate the session run while holding the session lock. The lock is taken
        without waiting; if another dispatch holds it, a "lock unavailable" reply is returned
        right away. The session state is persisted only when the handler returns normally, and
        the lock is released on every exit path.
        """
        ctx.entry = entry
        ctx.commands = self.commands
        ctx.setting_registry = self.settings
        if not entry.requires_lock:
            return await entry.handler(ctx)

        try:
            with self.services.locks.hold(ctx.key):
                ctx.session = self.services.sessions.get(ctx.key)
                response = await entry.handler(ctx)
                self.services.sessions.put(ctx.session)
                return response
        except LockUnavailable as e:
            logger.info(f"Session {ctx.key} is busy, rejected {entry.name}")
            return ctx.reply_text(e.message)
        finally:
            ctx.session = None

    async def handle(self, ctx: DispatchContext) -> Response:
        """Resolve ``ctx.args[0]`` and dispatch it, turning command errors into replies.

        An empty invocation (just the prefix) shows the help listing.
        """
        if not ctx.args:
            ctx.args = ["help"]

        try:
            entry = self.commands.resolve_or_raise(ctx.args[0])
            ensure_authorized(entry, ctx.is_admin, ctx.is_permissioned)
            return await self.dispatch(entry, ctx)
        except CommandError as e:
            logger.info(f"{type(e).__name__} for {ctx.args[0]!r} in guild {ctx.guild_id}")
            return ctx.reply_text(e.message, **e.params)
