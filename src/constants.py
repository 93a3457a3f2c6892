"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    LOCATE_ERROR = 1


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    CARGO_BIN = "cargo"
    MANIFEST_FILE = "Cargo.toml"
    METADATA_FORMAT_VERSION = 1
    DEPENDENCY_NAME = "bootloader"
    METADATA_TIMEOUT_SEC = None  # no limit unless configured
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    DEFAULT_LOG_LEVEL = "WARNING"

    # Environment variables
    ENV_CARGO = "CARGO"
    ENV_LOG_LEVEL = "BOOTLOADER_LOCATOR_LOG_LEVEL"

    # Config file section holding overrides (optional)
    CONFIG_SECTION = "bootloader_locator"
