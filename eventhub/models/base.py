"""Declarative base shared by all models."""

import uuid

from sqlalchemy.orm import declarative_base

Base = declarative_base()

def generate_id() -> str:
    """Generate an opaque string identifier."""
    return uuid.uuid4().hex
