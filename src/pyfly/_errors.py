"""Exception hierarchy for timestamp and duration operations."""


class FlyError(Exception):
    """Base exception for pyfly errors.

    Provides dual messaging: a short user-facing message and
    internal details for logging.
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class ParseError(FlyError, ValueError):
    """Raised when a duration or unit string cannot be parsed."""


class UnsupportedTypeError(FlyError, TypeError):
    """Raised when a duration amount is neither a duration value nor a string."""


class ZoneResolutionError(FlyError, LookupError):
    """Raised when a zone name is not found in the time zone database."""


# Sanitized user-facing error message constants
ERR_MSG_INVALID_DURATION = "invalid duration"
ERR_MSG_MISSING_UNIT = "missing unit in duration"
ERR_MSG_DURATION_OUT_OF_RANGE = "duration out of range"
ERR_MSG_UNSUPPORTED_DURATION_TYPE = "unsupported duration type"
ERR_MSG_UNSUPPORTED_INSTANT_TYPE = "unsupported instant type"
ERR_MSG_UNKNOWN_ZONE = "unknown time zone"
