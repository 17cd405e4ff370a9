"""Database operations and utilities.

This module provides common database operations and utilities,
including retry logic for transient failures.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from sqlalchemy.orm import Session

from .db_core import Database, DatabaseError, DatabaseConnectionError

logger = logging.getLogger(__name__)

# Type variable for generic return type
T = TypeVar('T')

def with_retry(
    max_attempts: int = 3,
    delay: float = 0.1,
    backoff: float = 2,
    exceptions: tuple = (DatabaseConnectionError,)
) -> Callable:
    """
    Decorator that implements retry logic for database operations.
    
    Only use it on operations that are safe to repeat (reads). Writes are
    surfaced to the caller unchanged.
    
    Args:
        max_attempts: Maximum number of retry attempts
        delay: Initial delay between retries in seconds
        backoff: Multiplier for delay between retries
        exceptions: Tuple of exceptions to catch and retry
    
    Example:
        @with_retry(max_attempts=3)
        def get(self, event_id: str) -> Optional[Event]:
            with self.db.session() as session:
                return session.get(Event, event_id)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception = None
            current_delay = delay
            
            for attempt in range(max_attempts):
                try:
                    return cast(T, func(*args, **kwargs))
                except exceptions as e:
                    last_exception = e
                    if attempt + 1 == max_attempts:
                        logger.error(
                            f"Final attempt failed for {func.__name__}: {str(e)}"
                        )
                        raise
                    
                    logger.warning(
                        f"Attempt {attempt + 1}/{max_attempts} failed for "
                        f"{func.__name__}: {str(e)}. Retrying in {current_delay}s..."
                    )
                    
                    time.sleep(current_delay)
                    current_delay *= backoff
            
            # Unreachable unless max_attempts < 1
            raise last_exception or DatabaseError("Unknown error in retry logic")
        
        return wrapper
    return decorator

def execute_in_transaction(
    db: Database,
    operation: Callable[..., T],
    *args: Any,
    **kwargs: Any
) -> T:
    """
    Execute a database operation within a single transaction.
    
    Args:
        db: Database to open the session on
        operation: Callable taking the session as first argument
        *args: Positional arguments to pass to the operation
        **kwargs: Keyword arguments to pass to the operation
    
    Returns:
        The result of the operation
    
    Raises:
        DatabaseError: If the transaction fails (see Database.session)
    """
    session: Session
    with db.session() as session:
        return operation(session, *args, **kwargs)
