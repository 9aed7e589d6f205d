from typing import List, Optional


class ErrorCode:
    # Skin errors
    SKIN_NOT_FOUND = "SKIN_001"
    SKIN_INVALID_FORMAT = "SKIN_002"
    SKIN_LOAD_FAILED = "SKIN_003"
    SKIN_API_FAILED = "SKIN_004"

    # Configuration errors
    CONFIG_INVALID = "CFG_001"
    CONFIG_PARSE_FAILED = "CFG_003"

    # Schematic errors
    SCHEMATIC_SAVE_FAILED = "SCH_001"

    # Network errors
    NETWORK_TIMEOUT = "NET_001"
    NETWORK_CONNECTION_FAILED = "NET_002"

    # Job control
    JOB_CANCELLED = "JOB_001"


class SkinStatueError(Exception):
    """Base class for every error raised by skin2statue."""

    default_code: Optional[str] = None

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code if error_code is not None else self.default_code

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class SkinLoadError(SkinStatueError):
    default_code = ErrorCode.SKIN_LOAD_FAILED


class SkinFormatError(SkinStatueError):
    default_code = ErrorCode.SKIN_INVALID_FORMAT


class NetworkError(SkinStatueError):
    default_code = ErrorCode.NETWORK_CONNECTION_FAILED


class SchematicError(SkinStatueError):
    default_code = ErrorCode.SCHEMATIC_SAVE_FAILED


class ConversionCancelled(SkinStatueError):
    default_code = ErrorCode.JOB_CANCELLED


class ConfigurationError(SkinStatueError):
    """
    Raised before any pixel is processed when a ConversionConfig is invalid.
    All violations are kept in `errors`, not just the first one.
    """
    default_code = ErrorCode.CONFIG_INVALID

    def __init__(self, errors: List[str], error_code: Optional[str] = None):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid configuration", error_code)
