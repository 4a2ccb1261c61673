"""The settings command: view, change and reset the bot settings of a guild."""
import logging

import discord

from commands.command_enums import CommandCategory, PermissionTier, SettingCategory
from commands.dispatcher import DispatchContext
from commands.errors import ExternalServiceError
from commands.registry import command_builder, SettingInfo
from commands.responses import Response, build_card
from model.settings import GuildSettings
from utils.localization import Message

logger = logging.getLogger('discord')

PREMIUM_MARKER = "💎"

OVERVIEW_TITLE = Message("settings.ConstructEmbedForSetting.AllSettings.Title", "Settings")
OVERVIEW_DESCRIPTION = Message(
    "settings.ConstructEmbedForSetting.AllSettings.Desc",
    "Type `{command_prefix} settings <setting>` to change a setting from those listed below")
SHOW_TITLE = Message("settings.SettingShow.Title", "Current Settings")
SETTING_DESCRIPTION = Message(
    "settings.ConstructEmbedForSetting.StarterDesc",
    "Type `{command_prefix} settings {setting}` to change this setting.\n\n")
FIELD_CURRENT = Message("settings.ConstructEmbedForSetting.Fields.CurrentValue", "Current Value")
FIELD_EXAMPLE = Message("settings.ConstructEmbedForSetting.Fields.Example", "Example")
FIELD_ARGUMENTS = Message("settings.ConstructEmbedForSetting.Fields.Arguments", "Arguments")
FIELD_ALIASES = Message("settings.ConstructEmbedForSetting.Fields.Aliases", "Aliases")
NO_ALIASES = Message("settings.ConstructEmbedForSetting.Fields.NoAliases", "None")
NULL_VALUE = "null"

SETTING_NOT_FOUND = Message(
    "settings.HandleSettingsCommand.default",
    "Sorry, `{setting}` is not a valid setting!\n")
PREMIUM_ONLY = Message(
    "settings.HandleSettingsCommand.PremiumOnly",
    "Sorry, `{setting}` is a 💎 AutoMuteUs Premium setting! Type `{command_prefix} premium` to learn more.")
SETTING_UPDATED = Message("settings.HandleSettingsCommand.Updated", "Set {setting} to {value}")
LANGUAGE_RELOADED = Message("settings.SettingLanguage.reloaded", "Localization files were reloaded!")
SETTINGS_RESET = Message("settings.SettingReset.Success", "Resetting guild settings to default values")


def _title(setting: SettingInfo) -> str:
    return f"{PREMIUM_MARKER} {setting.name}" if setting.premium else setting.name


def _current_value(setting: SettingInfo, settings: GuildSettings) -> str:
    return setting.render(getattr(settings, setting.attribute)) or NULL_VALUE


def settings_overview_card(ctx: DispatchContext) -> discord.Embed:
    """Card listing every setting with its short description."""
    fields = [
        (_title(setting), ctx.localize(setting.short_help), True)
        for setting in ctx.setting_registry.listable(ctx.is_admin, ctx.is_permissioned)
    ]
    return build_card(
        title=ctx.localize(OVERVIEW_TITLE),
        description=ctx.localize(OVERVIEW_DESCRIPTION, command_prefix=ctx.settings.command_prefix),
        fields=fields,
    )


def setting_card(setting: SettingInfo, ctx: DispatchContext) -> discord.Embed:
    """Card describing one setting, its current value, example, arguments and aliases."""
    prefix = ctx.settings.command_prefix
    description = (ctx.localize(SETTING_DESCRIPTION, command_prefix=prefix, setting=setting.name)
                   + ctx.localize(setting.description))
    fields = []
    if setting.attribute:
        fields.append((ctx.localize(FIELD_CURRENT), _current_value(setting, ctx.settings), False))
    fields += [
        (ctx.localize(FIELD_EXAMPLE), f"`{prefix} settings {setting.example}`", False),
        (ctx.localize(FIELD_ARGUMENTS), f"`{ctx.localize(setting.arguments)}`", False),
        (ctx.localize(FIELD_ALIASES), ", ".join(setting.aliases) or ctx.localize(NO_ALIASES), False),
    ]
    return build_card(title=_title(setting), description=description, fields=fields)


def settings_values_card(ctx: DispatchContext) -> discord.Embed:
    """Card with the current value of every setting."""
    fields = [
        (_title(setting), _current_value(setting, ctx.settings), True)
        for setting in ctx.setting_registry.entries()
        if setting.attribute
    ]
    return build_card(title=ctx.localize(SHOW_TITLE), fields=fields)


def _save(ctx: DispatchContext, settings: GuildSettings) -> None:
    store = ctx.services.guild_settings
    try:
        store.set(ctx.guild_id, settings).save()
    except OSError as e:
        logger.error(f"Failed to save settings for guild {ctx.guild_id}: {e}")
        raise ExternalServiceError(error=str(e))


def _reset(ctx: DispatchContext) -> Response:
    store = ctx.services.guild_settings
    try:
        store.reset(ctx.guild_id).save()
    except OSError as e:
        logger.error(f"Failed to reset settings for guild {ctx.guild_id}: {e}")
        raise ExternalServiceError(error=str(e))
    logger.info(f"Settings of guild {ctx.guild_id} reset by {ctx.author_id}")
    return ctx.reply_text(SETTINGS_RESET)


def _change(setting: SettingInfo, values: list[str], ctx: DispatchContext) -> Response:
    if setting.premium and not ctx.is_premium:
        return ctx.reply_text(PREMIUM_ONLY, setting=setting.name, command_prefix=ctx.settings.command_prefix)

    current = getattr(ctx.settings, setting.attribute)
    new_value, error = setting.mutate(current, values, ctx)
    if error is not None:
        raise error

    if setting.category is SettingCategory.LANGUAGE and values[0].lower() == "reload":
        return ctx.reply_text(LANGUAGE_RELOADED)

    setattr(ctx.settings, setting.attribute, new_value)
    _save(ctx, ctx.settings)
    logger.info(f"Guild {ctx.guild_id} set {setting.name} to {new_value!r}")
    return ctx.reply_text(SETTING_UPDATED, setting=setting.name, value=setting.render(new_value) or NULL_VALUE)


@command_builder.command(
    name="settings",
    category=CommandCategory.SETTINGS,
    example="settings commandPrefix !",
    short_help=Message("commands.AllCommands.Settings.shortDesc", "Adjust bot settings"),
    description=Message(
        "commands.AllCommands.Settings.desc",
        "Adjust the settings for the bot, like the prefix, language, admins and operator roles"),
    arguments=Message("commands.AllCommands.Settings.args", "<setting> <value>"),
    aliases=["sett", "set", "s"],
    emoji="🛠",
    tier=PermissionTier.ADMIN,
)
async def settings_command(ctx: DispatchContext) -> Response:
    """Show the settings overview, describe one setting, or change its value."""
    if not ctx.arguments:
        return ctx.reply_card(settings_overview_card(ctx))

    setting = ctx.setting_registry.resolve(ctx.arguments[0])
    if setting is None:
        return ctx.reply_text(SETTING_NOT_FOUND, setting=ctx.arguments[0])

    if setting.category is SettingCategory.SHOW:
        return ctx.reply_card(settings_values_card(ctx))
    if setting.category is SettingCategory.RESET:
        return _reset(ctx)

    values = ctx.arguments[1:]
    if not values:
        return ctx.reply_card(setting_card(setting, ctx))
    return _change(setting, values, ctx)
