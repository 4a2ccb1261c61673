# Default command prefix for guilds that have not configured one
DEFAULT_PREFIX = '.au'

# Maximum length of a command prefix set through settings
MAX_PREFIX_LENGTH = 10

# Platform limits
MAX_MESSAGE_LENGTH = 2000
MAX_DEBUG_MESSAGE_SIZE = 1980  # leaves room for the code block envelope

# Map images
DEFAULT_BASE_MAP_URL = 'https://github.com/automuteus/automuteus/blob/master/assets/maps/'
BASE_MAP_URL_ENV = 'BASE_MAP_URL'

# Files
GUILD_SETTINGS_FILENAME = 'guild_settings.json'
SESSION_BACKUP_FILENAME = 'sessions.pckl'
LOCALES_DIRECTORY = 'locales'

# Languages
DEFAULT_LANGUAGE = 'en'

BOT_VERSION = '1.0.0'
