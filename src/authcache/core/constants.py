"""Application-wide constants.

Cache key layout and expiry values shared by the cache and auth layers.
"""

# Cache namespacing: backend keys look like "cache:user:<id>"
CACHE_KEY_PREFIX = "cache:"
USER_KEY_PREFIX = "user:"

# How long a user projection stays cached before the directory is asked again
USER_CACHE_TTL_SECONDS = 60 * 30  # 30 minutes

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_USERNAME_LENGTH = 64
MAX_OAUTH_PROVIDER_LENGTH = 50
MAX_OAUTH_ID_LENGTH = 255

# OAuth
OAUTH_STATE_BYTES = 32
OAUTH_HTTP_TIMEOUT_SECONDS = 10.0
