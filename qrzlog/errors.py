"""Exceptions raised by the QRZ logbook client and the ADIF codec."""


class QrzLogbookError(Exception):
    """Base class for every error raised by this package."""


class HttpError(QrzLogbookError):
    """The HTTP request to the logbook service failed."""

    def __init__(self, detail: object) -> None:
        self.detail = detail
        super().__init__(f"HTTP request failed: {detail}")


class ApiError(QrzLogbookError):
    """The service answered with an error or an unexpected response."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"API error: {reason}")


class AuthError(QrzLogbookError):
    """Authentication failed or the key lacks the needed privileges."""

    def __init__(self) -> None:
        super().__init__("Authentication failed or insufficient privileges")


class InvalidKeyError(QrzLogbookError):
    """The API key does not look like a valid key."""

    def __init__(self) -> None:
        super().__init__("Invalid API key format")


class InvalidUserAgentError(QrzLogbookError):
    """The user agent is empty, too long or too generic."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid user agent: must be 128 characters or less and identifiable"
        )


class AdifParseError(QrzLogbookError):
    """ADIF text could not be turned into QSO records."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"ADIF parsing error: {message}")


class InvalidParamsError(QrzLogbookError):
    """A request was made with unusable parameters."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid parameters: {message}")