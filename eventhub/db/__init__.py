"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    DatabaseConnectionError,
    SessionError,
    IntegrityConstraintError,
    get_database,
)
from .operations import with_retry, execute_in_transaction

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',
    
    # Exceptions
    'DatabaseError',
    'DatabaseConnectionError',
    'SessionError',
    'IntegrityConstraintError',
    
    # Default instance
    'get_database',
    
    # Utilities
    'with_retry',
    'execute_in_transaction',
]
