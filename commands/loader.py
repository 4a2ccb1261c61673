"""Command loader to import all command modules and build the registries."""
import importlib

from commands.registry import Registry, CommandInfo, SettingInfo, build_registry, command_builder
from commands.setting_definitions import build_setting_registry

COMMAND_MODULES = [
    "commands.help_commands",
    "commands.game_commands",
    "commands.info_commands",
    "commands.debug_commands",
    "commands.settings_commands",
    "commands.stats_commands",
]

# Registration order, which is also the help listing order.
# Earlier commands keep an alias claimed by two of them.
COMMAND_ORDER = [
    "help", "new", "end", "pause", "refresh", "link", "unlink", "unmuteall", "force",
    "map", "cache", "privacy", "settings", "workerbot", "stats", "info", "ascii", "debugstate",
]


def load_all_commands():
    """Import all command modules to register their commands."""
    for module_name in COMMAND_MODULES:
        importlib.import_module(module_name)


def _order(definition: CommandInfo) -> int:
    # Unlisted commands go last, in declaration order
    if definition.name in COMMAND_ORDER:
        return COMMAND_ORDER.index(definition.name)
    return len(COMMAND_ORDER)


def build_registries() -> tuple[Registry[CommandInfo], Registry[SettingInfo]]:
    """Load every command module, then build the command and setting registries once."""
    load_all_commands()
    commands = build_registry(sorted(command_builder.definitions, key=_order), kind="command")
    return commands, build_setting_registry()
