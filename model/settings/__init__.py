from .guild_settings import GuildSettings, GuildSettingsStore, default_delays, default_voice_rules

__all__ = [
    'GuildSettings',
    'GuildSettingsStore',
    'default_delays',
    'default_voice_rules',
]
