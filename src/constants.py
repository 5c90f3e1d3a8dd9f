"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    NOT_FOUND = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
    MANIFEST_V2_URL = "https://launchermeta.mojang.com/mc/game/version_manifest_v2.json"
    JSON_CONTENT_TYPE = "application/json"
    REQUEST_TIMEOUT = 5  # Timeout in seconds for all HTTP requests
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "MCMETA_LOG_LEVEL"
    DETAIL_POOL_MAX_IDLE = 64
