"""Permission evaluation for registered entries."""
from __future__ import annotations

from typing import TYPE_CHECKING

from commands.command_enums import PermissionTier
from commands.errors import PermissionDenied

if TYPE_CHECKING:
    import discord

    from model.settings.guild_settings import GuildSettings


def authorize(entry, caller_is_admin: bool, caller_is_permissioned: bool) -> bool:
    """Check whether a caller may invoke an entry.

    Args:
        entry: Registered command or setting (anything with a ``required_tier``)
        caller_is_admin: Caller has bot admin rights
        caller_is_permissioned: Caller has bot operator rights

    Returns:
        True when the entry's tier is satisfied. Secret visibility plays no part here.
    """
    tier = entry.required_tier
    if tier is PermissionTier.ADMIN:
        return caller_is_admin
    if tier is PermissionTier.OPERATOR:
        return caller_is_permissioned
    return True


def ensure_authorized(entry, caller_is_admin: bool, caller_is_permissioned: bool) -> None:
    """Raise PermissionDenied unless ``authorize`` allows the call."""
    if not authorize(entry, caller_is_admin, caller_is_permissioned):
        raise PermissionDenied()


def caller_permissions(member: discord.Member, guild: discord.Guild, settings: GuildSettings) -> tuple[bool, bool]:
    """Compute ``(is_admin, is_permissioned)`` for a guild member.

    - The guild owner is always admin.
    - With no bot admins configured, members holding the Discord administrator permission are admin.
    - Otherwise admin means being listed in the guild's bot admins.
    - Admins are always permissioned; other members are permissioned when no operator roles are
      configured or when they hold one of them.
    """
    if guild is not None and member.id == guild.owner_id:
        return True, True

    if settings.admin_user_ids:
        is_admin = member.id in settings.admin_user_ids
    else:
        permissions = getattr(member, 'guild_permissions', None)
        is_admin = bool(permissions and permissions.administrator)

    if is_admin or not settings.operator_roles:
        return is_admin, True

    member_roles = {role.id for role in getattr(member, 'roles', [])}
    return False, any(role_id in member_roles for role_id in settings.operator_roles)
