"""
Custom exceptions for the Rookie Draft Board

Every error is recoverable at the call site. The HTTP facade maps each class
to a status code in one middleware instead of per-handler try/except blocks.
"""


class DraftBoardException(Exception):
    """Base exception for all draft board errors."""
    pass


class APIException(DraftBoardException):
    """Exception for HTTP API-related errors."""
    pass


class ValidationException(DraftBoardException):
    """Exception for malformed or out-of-range data."""
    pass


class NotFoundError(DraftBoardException):
    """Raised when an operation references an id that does not exist."""
    pass


class PlayerNotFoundError(NotFoundError):
    """Raised when a requested player cannot be found."""
    pass


class TeamNotFoundError(NotFoundError):
    """Raised when a requested team cannot be found."""
    pass


class InvariantViolation(DraftBoardException):
    """Raised when a mutation would break the dense rank ordering."""
    pass


class DraftException(DraftBoardException):
    """Exception for draft-related errors."""
    pass


class TradeException(DraftException):
    """Exception for rejected pick trades."""
    pass


class ConfigurationException(DraftBoardException):
    """Exception for configuration-related errors."""
    pass
