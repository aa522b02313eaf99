"""
Exceptions raised by the booking flow.
"""


class BookingError(Exception):
    """Base class for all booking errors."""


class ConfigError(BookingError):
    """Raised when the environment does not describe a usable configuration."""


class SelectorNotFound(BookingError):
    """Raised when an expected element never shows up on the page."""


class LoginFailed(BookingError):
    """Raised when the site keeps us on the login page after submitting."""


class NetworkTimeout(BookingError):
    """Raised when navigation or a page load times out."""


class SlotDisabled(BookingError):
    """Raised when the wanted time slot is shown but cannot be picked."""
