"""User profile management."""

import logging
from typing import Optional

from ..db import IntegrityConstraintError
from ..models import EventCategory, User
from ..stores import UserStore
from ..utils.timezone import now_utc
from .exceptions import NotFoundError, ConflictError, InvalidArgumentError
from .schemas import (
    Page,
    UserCreateRequest,
    UserProfileView,
    UserUpdateRequest,
    check_page_request,
    parse_enum,
)

logger = logging.getLogger(__name__)

class UserService:
    """Create, read, update and deactivate user profiles."""
    
    def __init__(self, user_store: UserStore):
        self.user_store = user_store
    
    def create_user(self, request: UserCreateRequest) -> UserProfileView:
        """
        Create an active user profile.
        
        Raises:
            InvalidArgumentError: If the e-mail is missing
            ConflictError: If another user already has the e-mail
        """
        email = (request.email or '').strip().lower()
        if not email:
            raise InvalidArgumentError("email is required")
        if self.user_store.get_by_email(email) is not None:
            raise ConflictError(f"A user with email {email} already exists")
        
        now = now_utc()
        user = User(
            email=email,
            first_name=request.first_name,
            last_name=request.last_name,
            phone=request.phone,
            active=True,
            notifications=True,
            created_at=now,
            updated_at=now,
        )
        try:
            user = self.user_store.save(user)
        except IntegrityConstraintError as e:
            raise ConflictError(f"A user with email {email} already exists") from e
        logger.info(f"Created user {user.id}")
        return UserProfileView.from_model(user)
    
    def get_profile(self, user_id: str) -> UserProfileView:
        return UserProfileView.from_model(self._get_user(user_id))
    
    def get_user_by_id(self, user_id: str) -> UserProfileView:
        return self.get_profile(user_id)
    
    def update_profile(self, user_id: str, request: UserUpdateRequest) -> UserProfileView:
        """
        Copy the profile fields of request onto the user.
        
        Name, phone and image are always overwritten; preferences and
        notifications only when provided.
        """
        user = self._get_user(user_id)
        user.first_name = request.first_name
        user.last_name = request.last_name
        user.phone = request.phone
        user.profile_image = request.profile_image
        if request.preferences is not None:
            user.preferences = [
                parse_enum(EventCategory, category, "category").name
                for category in request.preferences
            ]
        if request.notifications is not None:
            user.notifications = bool(request.notifications)
        user.updated_at = now_utc()
        user = self.user_store.save(user)
        return UserProfileView.from_model(user)
    
    def delete_user(self, user_id: str) -> None:
        """Soft delete a user by marking the profile inactive."""
        user = self._get_user(user_id)
        user.active = False
        user.updated_at = now_utc()
        self.user_store.save(user)
        logger.info(f"Deactivated user {user_id}")
    
    def list_users(self, page: int = 0, size: Optional[int] = None) -> Page[UserProfileView]:
        size = check_page_request(page, size)
        users, total = self.user_store.find_all(page, size)
        return Page(
            items=[UserProfileView.from_model(u) for u in users],
            page=page,
            size=size,
            total=total,
        )
    
    def _get_user(self, user_id: str) -> User:
        user = self.user_store.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user
