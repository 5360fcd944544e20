"""
Base model with common fields and methods
"""
from varmepumpe import db
from datetime import date, datetime, timezone
from decimal import Decimal


def utcnow():
    """Naive UTC timestamp; SQLite drops tzinfo so everything is stored naive"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(db.Model):
    """Abstract base model with common fields"""
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    def to_dict(self, exclude=None):
        """
        Convert model to dictionary

        Args:
            exclude (list): List of fields to exclude

        Returns:
            dict: Model as dictionary
        """
        exclude = exclude or []
        data = {}

        for column in self.__table__.columns:
            if column.name not in exclude:
                value = getattr(self, column.name)

                # Handle datetime / date
                if isinstance(value, (datetime, date)):
                    value = value.isoformat()
                # Handle Numeric columns
                elif isinstance(value, Decimal):
                    value = float(value)

                data[column.name] = value

        return data


class TimestampMixin:
    """Adds an updated_at column refreshed on every UPDATE"""
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def touch(self):
        self.updated_at = utcnow()
