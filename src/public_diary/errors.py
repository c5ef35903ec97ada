"""Exception types raised by the diary core."""


class DiaryError(Exception):
    """Base class for diary errors."""


class InvalidDateKeyError(DiaryError, ValueError):
    """A date key is not a calendar-valid ``YYYY-MM-DD`` string."""

    def __init__(self, value: str) -> None:
        """Initialize with the rejected value."""
        super().__init__(f"Invalid date format: {value!r}. Use YYYY-MM-DD.")
        self.value = value


class ContentTooLongError(DiaryError, ValueError):
    """Entry content exceeds the maximum length."""

    def __init__(self, length: int, limit: int) -> None:
        """Initialize with the offending length and the limit."""
        super().__init__(f"Content too long. Maximum {limit} characters allowed (got {length}).")
        self.length = length
        self.limit = limit


class StorageError(DiaryError):
    """The underlying store failed. The caller may retry the whole request."""

    retryable = True


class VersionConflictError(StorageError):
    """Version number assignment collided even after a retry."""


class CaptchaError(DiaryError):
    """The CAPTCHA verification service could not be reached."""
