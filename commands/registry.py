"""Command and setting registries: definition collection, build-time conflict detection and lookup."""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Awaitable, Callable, Generic, Iterable, NamedTuple, Optional, TypeVar, Union, TYPE_CHECKING

from commands.command_enums import CommandCategory, PermissionTier, SettingCategory, Visibility
from commands.errors import ConfigurationConflict, NotFound
from commands.permissions import authorize
from utils.localization import Message

if TYPE_CHECKING:
    from commands.dispatcher import DispatchContext
    from commands.responses import Response

logger = logging.getLogger('discord')


# =============================================================================
# Type Definitions
# =============================================================================

class CommandInfo(NamedTuple):
    """A registered command."""
    name: str
    handler: Callable[[DispatchContext], Awaitable[Response]]
    category: CommandCategory
    short_help: Message
    description: Message
    arguments: Message
    example: str = ""
    aliases: tuple[str, ...] = ()
    emoji: str = ""
    visibility: Visibility = Visibility.PUBLIC
    required_tier: PermissionTier = PermissionTier.NONE
    requires_lock: bool = False

    @property
    def is_secret(self) -> bool:
        return self.visibility is Visibility.SECRET


class SettingInfo(NamedTuple):
    """A registered guild setting.

    ``mutate(current_value, args, ctx)`` returns ``(new_value, error)`` where ``error`` is a
    ``ValidationError`` (or None). ``render(value)`` produces the text shown as the current value.
    ``attribute`` names the ``GuildSettings`` field the setting reads and writes; settings with
    no backing value (``show``, ``reset``) leave it empty.
    """
    name: str
    category: SettingCategory
    short_help: Message
    description: Message
    arguments: Message
    example: str = ""
    aliases: tuple[str, ...] = ()
    premium: bool = False
    attribute: str = ""
    mutate: Optional[Callable] = None
    render: Optional[Callable] = None
    visibility: Visibility = Visibility.PUBLIC
    required_tier: PermissionTier = PermissionTier.NONE

    @property
    def is_secret(self) -> bool:
        return self.visibility is Visibility.SECRET


Entry = Union[CommandInfo, SettingInfo]
EntryT = TypeVar('EntryT', CommandInfo, SettingInfo)


# =============================================================================
# Registry
# =============================================================================

class Registry(Generic[EntryT]):
    """Immutable, case-insensitive lookup table from names and aliases to entries.

    Built once by ``build_registry``; safe to read from any number of concurrent dispatches.
    """

    def __init__(self, kind: str, entries: tuple[EntryT, ...], keys: dict[str, EntryT]):
        self._kind = kind
        self._entries = entries
        self._keys = MappingProxyType(dict(keys))

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def keys(self) -> MappingProxyType:
        """All registered keys (lower-cased) mapped to their owning entry."""
        return self._keys

    def resolve(self, token: str) -> Optional[EntryT]:
        """Exact, case-insensitive lookup. Returns None when nothing owns the token."""
        return self._keys.get(token.lower())

    def resolve_or_raise(self, token: str, not_found: Optional[Message] = None) -> EntryT:
        entry = self.resolve(token)
        if entry is None:
            raise NotFound(not_found)
        return entry

    def entries(self) -> tuple[EntryT, ...]:
        """Entries in definition order, including those that lost some of their aliases."""
        return self._entries

    def keys_for(self, entry: EntryT) -> tuple[str, ...]:
        """Keys that actually resolve to ``entry`` (conflicting aliases excluded)."""
        return tuple(key for key, owner in self._keys.items() if owner is entry)

    def listable(self, is_admin: bool, is_permissioned: bool) -> tuple[EntryT, ...]:
        """Non-secret entries the caller is allowed to use, in definition order."""
        return tuple(
            entry for entry in self._entries
            if not entry.is_secret and authorize(entry, is_admin, is_permissioned)
        )

    def __contains__(self, token: str) -> bool:
        return token.lower() in self._keys

    def __len__(self) -> int:
        return len(self._entries)

    def log_registered(self, log: logging.Logger = logger) -> None:
        """Log all registered entries and their aliases at startup."""
        names = [entry.name for entry in self._entries]
        log.info(f"📋 {self._kind.capitalize()} Registry: {len(names)} entries, {len(self._keys)} keys")
        log.info(f"Registered {self._kind}s: {', '.join(names)}")
        aliases = [f"{key} -> {owner.name}" for key, owner in self._keys.items() if key != owner.name.lower()]
        if aliases:
            log.info(f"{self._kind.capitalize()} aliases: {', '.join(aliases)}")


def build_registry(definitions: Iterable[EntryT], kind: str = "command") -> Registry[EntryT]:
    """Build a registry from definitions, in order.

    Each definition registers its canonical name and then its aliases. Blank keys are
    skipped. A key that is already taken is a configuration conflict: it is logged and the
    later claim is dropped, so the earliest registrant of a key always owns it.
    """
    entries: list[EntryT] = []
    keys: dict[str, EntryT] = {}

    for definition in definitions:
        entries.append(definition)
        for key in (definition.name, *definition.aliases):
            if not key:
                logger.error(f"Provided a blank key for {kind}: {definition.name}")
                continue

            normalized = key.lower()
            owner = keys.get(normalized)
            if owner is not None:
                conflict = ConfigurationConflict(normalized, owner.name, definition.name)
                logger.warning(f"{kind.capitalize()} registry: {conflict}")
                continue

            keys[normalized] = definition

    return Registry(kind, tuple(entries), keys)


# =============================================================================
# Definition collection
# =============================================================================

class RegistryBuilder:
    """Collects command definitions, in declaration order, through a decorator.

    The builder only records definitions. Lookup happens on the ``Registry`` returned by
    ``build()``, which is constructed once at startup and never changes afterwards.
    """

    def __init__(self):
        self.definitions: list[CommandInfo] = []

    def command(self, name: str,
                category: CommandCategory,
                short_help: Message,
                description: Message,
                arguments: Message,
                example: str = "",
                aliases: Optional[list[str]] = None,
                emoji: str = "",
                secret: bool = False,
                tier: PermissionTier = PermissionTier.NONE,
                requires_lock: bool = False):
        """Decorator to declare a command handler along with its help metadata.

        Args:
            name: Canonical command name.
            category: Kind of operation.
            short_help: One-line description shown in the help listing.
            description: Full description shown by ``help <command>``.
            arguments: Argument shape shown by ``help <command>``.
            example: Example invocation, without the prefix.
            aliases: Alternative names. Aliases already claimed by an earlier command are dropped.
            emoji: Emoji shown next to the command in help.
            secret: Hide the command from help listings (it stays usable).
            tier: Permission tier required to invoke the command.
            requires_lock: The handler mutates the channel's game session, so the dispatcher
                must hold the session lock while it runs.

        Examples:
            ```python
            @command_builder.command(
                name="pause",
                category=CommandCategory.PAUSE,
                short_help=Message("commands.Pause.shortDesc", "Pause the bot"),
                description=Message("commands.Pause.desc", "Pause the bot so it doesn't automute"),
                arguments=Message("commands.Pause.args", "None"),
                aliases=["unpause", "p"],
                tier=PermissionTier.OPERATOR,
                requires_lock=True,
            )
            async def pause_command(ctx: DispatchContext) -> Response:
                ...
            ```
        """

        def decorator(func):
            self.definitions.append(CommandInfo(
                name=name,
                handler=func,
                category=category,
                short_help=short_help,
                description=description,
                arguments=arguments,
                example=example,
                aliases=tuple(aliases or ()),
                emoji=emoji,
                visibility=Visibility.SECRET if secret else Visibility.PUBLIC,
                required_tier=tier,
                requires_lock=requires_lock,
            ))
            return func

        return decorator

    def build(self) -> Registry[CommandInfo]:
        return build_registry(self.definitions, kind="command")


# Definitions declared by the command modules
command_builder = RegistryBuilder()
