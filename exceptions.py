"""
Splitter exception hierarchy.

All engine errors inherit from SplitterError so callers can catch them in one place.
"""


class SplitterError(Exception):
    """Base exception for all settlement errors"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class EmptyInputError(SplitterError):
    """Raised when there are no participants or no expenses"""
    pass


class DanglingReferenceError(SplitterError):
    """Raised when an expense payer does not resolve to a participant"""
    pass


class InvalidHubError(SplitterError):
    """Raised when hub mode cannot resolve the hub participant's unit"""
    pass


class InvalidModeError(SplitterError):
    """Raised when an unknown transfer mode is requested"""
    pass
