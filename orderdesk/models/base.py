from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # Columns are timezone-naive UTC on every backend
    return datetime.now(timezone.utc).replace(tzinfo=None)
