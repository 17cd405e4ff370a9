"""Event management backend: events, registrations and user profiles."""

__version__ = "1.0.0"
