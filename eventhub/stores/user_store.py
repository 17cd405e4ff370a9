"""User persistence."""

from typing import List, Optional, Tuple

from sqlalchemy import select, func

from ..db import Database, with_retry
from ..models import User

class UserStore:
    """SQLAlchemy-backed store for User rows."""
    
    def __init__(self, db: Database):
        self.db = db
    
    @with_retry()
    def get(self, user_id: str) -> Optional[User]:
        with self.db.session() as session:
            return session.get(User, user_id)
    
    @with_retry()
    def get_by_email(self, email: str) -> Optional[User]:
        with self.db.session() as session:
            return session.scalars(select(User).where(User.email == email)).first()
    
    @with_retry()
    def find_all(self, page: int, size: int) -> Tuple[List[User], int]:
        """Get one page of users (zero-based page) and the total count."""
        with self.db.session() as session:
            total = session.scalar(select(func.count()).select_from(User))
            query = select(User).order_by(User.created_at, User.id).offset(page * size).limit(size)
            return list(session.scalars(query)), total or 0
    
    def save(self, user: User) -> User:
        with self.db.session() as session:
            return session.merge(user)
