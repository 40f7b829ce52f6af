"""
Declarative base shared by every ORM model in `book_api.models`.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Constraint names surface in IntegrityError diagnostics (e.g. "uq_countries_name_key"),
# so they are generated from a fixed convention instead of left to the dialect.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
