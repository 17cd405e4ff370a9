"""Logging configuration for the application."""

import logging
import sys

def setup_logging(level: int = logging.INFO):
    """Configure logging for the application."""
    # Create a formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    
    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    
    # SQL echo is controlled by DatabaseConfig.echo, not the root level
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)
    
    # Configure specific loggers
    loggers = [
        'eventhub.services.event_service',
        'eventhub.services.registration_service',
        'eventhub.services.user_service',
        'eventhub.db.db_core',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't add handler here since it's already handled by root logger
