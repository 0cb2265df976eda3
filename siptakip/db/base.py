"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from siptakip.models import integration as _integration  # noqa: E402,F401
from siptakip.models import menu as _menu  # noqa: E402,F401
from siptakip.models import order as _order  # noqa: E402,F401
from siptakip.models import restaurant as _restaurant  # noqa: E402,F401
from siptakip.models import table as _table  # noqa: E402,F401
from siptakip.models import user as _user  # noqa: E402,F401
