# models/base.py
from datetime import datetime, timezone

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Deterministic constraint names so Alembic autogenerate can diff them
NAMING_CONVENTION = {
     "ix": "ix_%(column_0_label)s",
     "uq": "uq_%(table_name)s_%(column_0_name)s",
     "fk": "fk_%(table_name)s_%(column_0_name)s",
     "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Every model names its own table explicitly.
     """
     metadata = MetaData(naming_convention=NAMING_CONVENTION)


def utc_now() -> datetime:
     """Current UTC time as a naive datetime, matching the DateTime columns."""
     return datetime.now(timezone.utc).replace(tzinfo=None)
