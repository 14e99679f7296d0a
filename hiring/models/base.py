from datetime import date, datetime, timezone
from decimal import Decimal
from ..extensions import db


def utcnow():
    """Naive UTC timestamp, matching what ``db.func.now()`` stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = db.Column(db.DateTime, server_default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now(), nullable=False)


def _plain(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class SerializerMixin:
    # column names never rendered into API payloads
    __serialize_exclude__ = ()

    def to_dict(self):
        return {c.name: _plain(getattr(self, c.name)) for c in self.__table__.columns
                if c.name not in self.__serialize_exclude__}
