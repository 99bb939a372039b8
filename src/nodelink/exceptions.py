"""Exception classes for the connection supervisor.

Transport open failures and timeouts use the builtin ``ConnectionError`` and
``TimeoutError``; the classes here cover the remaining failure modes.

Exception classes support two patterns:
1. No-argument raise: raise AuthError()
2. Contextual attributes: err = AuthError(auth_id="abc"); raise err
"""

from typing import Any

from .config.errors import ConfigurationError


class ApplicationError(Exception):
    """Base exception for all application errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Application error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class AuthError(ApplicationError):
    """Authentication handshake failed."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Authentication handshake failed"
        super().__init__(message, **kwargs)


class NotConnectedError(ApplicationError):
    """No open transport to send on."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "WebSocket not connected"
        super().__init__(message, **kwargs)


class StateTransitionError(ApplicationError):
    """Connection state machine received an illegal transition."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Illegal connection state transition"
        super().__init__(message, **kwargs)


class ProxyConfigurationError(ConfigurationError):
    """Proxy URL is malformed or carries incomplete credentials."""


__all__ = [
    "ApplicationError",
    "AuthError",
    "ConfigurationError",
    "NotConnectedError",
    "ProxyConfigurationError",
    "StateTransitionError",
]
