from typing import Literal

LogFormats = Literal["plaintext", "json"]
LogLevels = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Shown on the client-facing page as the organisation presenting the grants.
DEFAULT_PRESENTER = "מענקים בקליק"

DEFAULT_GRANT_STATUS = "open"
DEFAULT_MATCH_PCT = 70

ADMIN_KEY_HEADER = "X-Admin-Key"
