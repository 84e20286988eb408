class AzAuthError(Exception):
    """Base class for errors raised by azauth."""
    pass


class AuthenticationError(AzAuthError):
    """Raised when the server rejects the credentials or the access token."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResponseFormatError(AzAuthError, ValueError):
    """Raised when a response body does not match the expected shape."""
    pass
