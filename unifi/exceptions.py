"""
Exception hierarchy for UniFi controller operations.
"""


class UniFiApiError(Exception):
    """Base exception for all UniFi API errors."""
    pass


class UniFiConnectionError(UniFiApiError):
    """Transport failures: connection errors, non-JSON bodies, malformed envelopes."""
    pass


class UniFiAuthenticationError(UniFiApiError):
    """The controller rejected the login request."""
    pass


class UniFiLoginRequiredError(UniFiApiError):
    """The controller reported that the session is missing or expired."""
    pass


class UniFiControllerError(UniFiApiError):
    """Any other error reported by the controller, carrying its message verbatim."""
    pass
