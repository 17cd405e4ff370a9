"""Core database functionality and configuration.

This module provides database management with proper configuration,
connection pooling, and session handling.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_PATH = Path(__file__).parent.parent.parent / 'data' / 'events.db'

class DatabaseConfig:
    """Database configuration settings."""
    
    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        postgres_url: Optional[str] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via postgres_url parameter.

        Args:
            url: Explicit SQLAlchemy URL. Takes precedence over the environment
                 based selection (used by tests, e.g. 'sqlite://')
            sqlite_path: Path to SQLite database file (for development)
            postgres_url: PostgreSQL connection URL (for production)
                        If not provided, will use DATABASE_URL env variable
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via postgres_url parameter or DATABASE_URL env variable
        """
        self.url = url
        if url:
            self.postgres_url = None
            self.sqlite_path = None
        elif IS_PRODUCTION_ENVIRONMENT:
            # For production, get URL from parameter or env variable
            self.postgres_url = postgres_url or os.environ.get('DATABASE_URL')
            if not self.postgres_url:
                raise ValueError(
                    "Database URL must be provided either via postgres_url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
            self.sqlite_path = None
        else:
            # For development, handle SQLite path
            self.postgres_url = None
            self.sqlite_path = sqlite_path or DEFAULT_SQLITE_PATH
        
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping
    
    @property
    def connection_url(self) -> str:
        """Get the database connection URL based on environment."""
        if self.url:
            return self.url
        if self.postgres_url:
            return self.postgres_url
        if not self.sqlite_path:
            raise ValueError("SQLite path not configured")
        return f"sqlite:///{self.sqlite_path}"
    
    @property
    def is_sqlite(self) -> bool:
        """Whether the configured backend is SQLite."""
        return self.connection_url.startswith('sqlite')
    
    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args: Dict[str, Any] = {"echo": self.echo}
        
        # SQLite-specific configuration. One connection shared by every thread,
        # so transactions are not isolated from each other (development and tests only)
        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool
        
        # PostgreSQL-specific configuration
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })
        
        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class DatabaseConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass

class IntegrityConstraintError(DatabaseError):
    """Raised when a write violates a uniqueness or integrity constraint."""
    pass

class Database:
    """Database manager owning the engine and the session factory."""
    
    def __init__(self, config: Optional[DatabaseConfig] = None):
        """Initialize the database manager and create the engine."""
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        # Objects stay usable after the session closes; stores hand them to services
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._tables_checked = False
        
        self._setup_engine()
    
    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            if self.config.sqlite_path:
                Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise DatabaseConnectionError(f"Failed to create database engine: {e}") from e
    
    @property
    def supports_row_locks(self) -> bool:
        """
        Whether SELECT ... FOR UPDATE is meaningful on this backend.
        
        Only then is registration admission safe against concurrent callers.
        """
        return not self.config.is_sqlite
    
    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise DatabaseConnectionError("Database engine not initialized")
        
        try:
            Base.metadata.create_all(self.engine)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except Exception as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e
    
    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise DatabaseConnectionError("Database engine not initialized")
        
        try:
            existing_tables = set(inspect(self.engine).get_table_names())
            required_tables = set(Base.metadata.tables.keys())
            
            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                Base.metadata.create_all(self.engine)
                logger.info("Database schema initialized successfully")
            
            self._tables_checked = True
        except Exception as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e
    
    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.
        
        This is the preferred way to get a database session. It handles
        commit/rollback automatically and ensures proper cleanup.
        
        Example:
            with db.session() as session:
                event = session.get(Event, event_id)
                event.title = "New Title"
                # No need to call commit - it's handled automatically
        
        Raises:
            IntegrityConstraintError: If the transaction violates a constraint
            DatabaseConnectionError: If the database could not be reached
            SessionError: If there are other issues with the session
        """
        # Ensure tables exist before providing a session
        self.ensure_tables_exist()
        
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise IntegrityConstraintError(f"Integrity error: {e.orig}") from e
        except OperationalError as e:
            session.rollback()
            raise DatabaseConnectionError(f"Database operational error: {e}") from e
        except DatabaseError:
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        finally:
            session.close()
    
    def dispose(self) -> None:
        """Release all pooled connections."""
        if self.engine:
            self.engine.dispose()

_default_db: Optional[Database] = None

def get_database() -> Database:
    """Get the process-wide database configured from the environment."""
    global _default_db
    if _default_db is None:
        _default_db = Database()
    return _default_db
