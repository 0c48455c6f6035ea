"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict so routes and seed data never build models field by field.

Lives in the business layer: it decides which columns callers may write
(protected columns are skipped) and how values are serialized for the API.
"""

from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import inspect
from itassets.logger import get_logger

logger = get_logger("itassets.buisness.core.data_insertion")


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    Models list columns that must never be written from user data in
    ``protected_fields``; from_dict silently skips them.
    """

    protected_fields = frozenset({'id', 'created_at', 'updated_at'})

    @classmethod
    def column_names(cls):
        return {c.key for c in inspect(cls).columns}

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (iterable, optional): Extra fields to skip

        Returns:
            Model instance (not added to the session)
        """
        skipped = set(skip_fields or ()) | set(cls.protected_fields)
        columns = cls.column_names()

        filtered_data = {
            key: value for key, value in data_dict.items()
            if key in columns and key not in skipped
        }
        ignored = set(data_dict) - set(filtered_data)
        if ignored:
            logger.debug(f"{cls.__name__}.from_dict ignored fields: {sorted(ignored)}")

        return cls(**filtered_data)

    def to_dict(self, exclude=None):
        """
        Convert model instance to a JSON-friendly dictionary

        Args:
            exclude (iterable, optional): Column names to leave out

        Returns:
            dict: Dictionary representation of the model
        """
        excluded = set(exclude or ())
        result = {}

        for column in inspect(self.__class__).columns:
            if column.key in excluded:
                continue
            value = getattr(self, column.key)

            if isinstance(value, (datetime, date)):
                result[column.key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[column.key] = float(value)
            elif isinstance(value, list):
                result[column.key] = list(value)
            else:
                result[column.key] = value

        return result
