"""Errors raised by the services.

All of them are surfaced to the caller as request failures; the services
never retry them.
"""

class ServiceError(Exception):
    """Base exception for service-level failures."""
    pass

class NotFoundError(ServiceError):
    """A referenced event, registration or user does not exist."""
    pass

class ForbiddenError(ServiceError):
    """The caller does not own the event or registration it tried to change."""
    pass

class ConflictError(ServiceError):
    """The operation clashes with existing state (e.g. duplicate registration)."""
    pass

class InvalidArgumentError(ServiceError, ValueError):
    """An argument could not be parsed or violates a constraint."""
    pass
