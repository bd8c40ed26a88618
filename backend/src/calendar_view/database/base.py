# Base class for calendar view database models
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all calendar view ORM models."""

    pass
