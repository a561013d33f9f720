"""
Single place for constants that are used across the package.
"""

from typing import Final, FrozenSet

# --------------------------- provider endpoints --------------------------- #
PLAYER_ENDPOINT: Final[str] = "https://www.youtube.com/youtubei/v1/player"

# client identity sent with every player request
CLIENT_NAME: Final[str] = "WEB"
CLIENT_VERSION: Final[str] = "2.20241126.01.00"
CLIENT_LOCALE: Final[str] = "en"

# appended to a caption track's baseUrl to request the TTML variant
TTML_FORMAT: Final[str] = "ttml"

# --------------------------- validation ----------------------------------- #
ALLOWED_DOMAINS: Final[FrozenSet[str]] = frozenset(
    {
        "youtube.com",
        "youtu.be",
        "m.youtube.com",
    }
)
VIDEO_ID_LEN: Final[int] = 11

ENGLISH_CODE: Final[str] = "en"
ENGLISH_VSS_PREFIX: Final[str] = ".en"

# --------------------------- runtime defaults ----------------------------- #
DEFAULT_INTERVAL: Final[float] = 10.0
DEFAULT_PORT: Final[int] = 8080
DEFAULT_HOST: Final[str] = "0.0.0.0"
DEFAULT_TIMEOUT: Final[float] = 30.0

API_PREFIX: Final[str] = "/api/v1"
