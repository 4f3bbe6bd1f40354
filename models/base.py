"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class RecordSchema(BaseSchema):
    """
    Base for immutable input records.

    Accepts either the wire column name (alias) or the attribute name.
    Values are kept as delivered: join keys and descriptions are not trimmed.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=False,
    )
