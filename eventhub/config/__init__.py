"""Configuration package initialization."""

from .environment import IS_PRODUCTION_ENVIRONMENT
from . import settings

__all__ = ['IS_PRODUCTION_ENVIRONMENT', 'settings']
