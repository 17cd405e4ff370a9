"""Services package initialization."""

from .exceptions import (
    ServiceError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
    InvalidArgumentError,
)
from .schemas import (
    EventCreateRequest,
    EventUpdateRequest,
    EventView,
    Page,
    RegistrationView,
    RegistrationWithEvent,
    UserCreateRequest,
    UserProfileView,
    UserUpdateRequest,
)
from .event_service import EventService
from .registration_service import RegistrationService
from .user_service import UserService

__all__ = [
    'ServiceError',
    'NotFoundError',
    'ForbiddenError',
    'ConflictError',
    'InvalidArgumentError',
    'EventCreateRequest',
    'EventUpdateRequest',
    'EventView',
    'Page',
    'RegistrationView',
    'RegistrationWithEvent',
    'UserCreateRequest',
    'UserProfileView',
    'UserUpdateRequest',
    'EventService',
    'RegistrationService',
    'UserService',
]
