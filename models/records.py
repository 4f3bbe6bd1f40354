"""
Input record schemas.

Typed versions of the four data feeds the analysis joins:
plant master, inventory, publish status and product master.
Wire column names are accepted as aliases.
"""

import math
from datetime import date, datetime
from typing import Optional, Union

from pydantic import AliasChoices, Field, field_validator

from models.base import RecordSchema


# Raw date cell: spreadsheet serial, string, or already a date
RawDate = Union[datetime, date, float, str]


def _is_blank(value) -> bool:
    """True for None, NaN and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def coerce_identifier(value):
    """
    String-cast an identifier cell.

    9000 -> "9000", 9000.0 -> "9000", "0042" -> "0042", None -> ""

    Empty cells become "" so the row fails the organization or PLU
    check downstream instead of failing validation.
    """
    if _is_blank(value):
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and not math.isnan(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


class PlantRecord(RecordSchema):
    """One plant master row. A site may appear once per supply channel."""

    site_number: str = Field(..., alias="SITE_NUMBER")
    region: str = Field(default="", alias="REGION")
    organization_number: str = Field(default="", alias="ORGANIZATION_NUMBER")
    open_date: Optional[RawDate] = Field(default=None, alias="OPEN_DATE")
    close_date: Optional[RawDate] = Field(default=None, alias="CLOSE_DATE")
    site_description: Optional[str] = Field(default=None, alias="SITE_DESCRIPTION")

    @field_validator("site_number", "region", "organization_number", mode="before")
    @classmethod
    def cast_identifier(cls, v):
        return coerce_identifier(v)

    @field_validator("open_date", "close_date", "site_description", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Empty cells mean "no value"."""
        return None if _is_blank(v) else v


class InventoryRecord(RecordSchema):
    """One SKU x supply channel stock row."""

    sku: str
    available_quantity: float = Field(
        default=0,
        validation_alias=AliasChoices("availableQuantity", "available_quantity"),
    )
    supply_channel_key: str = Field(
        ...,
        validation_alias=AliasChoices(
            "supplyChannel.key", "supplyChannel_key", "supply_channel_key"
        ),
    )

    @field_validator("sku", "supply_channel_key", mode="before")
    @classmethod
    def cast_identifier(cls, v):
        return coerce_identifier(v)

    @field_validator("available_quantity", mode="before")
    @classmethod
    def parse_quantity(cls, v):
        """Non-numeric quantities count as zero stock."""
        if isinstance(v, bool):
            return float(v)
        try:
            quantity = float(v)
        except (TypeError, ValueError):
            return 0.0
        return 0.0 if math.isnan(quantity) else quantity


class StatusRecord(RecordSchema):
    """Publish status for one SKU."""

    key: str
    published: bool = False

    @field_validator("key", mode="before")
    @classmethod
    def cast_identifier(cls, v):
        return coerce_identifier(v)

    @field_validator("published", mode="before")
    @classmethod
    def parse_published(cls, v):
        """Only a literal true (any case) counts as published."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() == "true"
        if _is_blank(v):
            return False
        return bool(v)


class ProductRecord(RecordSchema):
    """One product master row. Duplicates and non-PLU SKUs are expected."""

    sku_number: str = Field(..., alias="SKU_NUMBER")
    status_in_sap: str = Field(default="", alias="STATUS_IN_SAP")
    sku_description: Optional[str] = Field(default=None, alias="SKU_DESCRIPTION")
    available_in_channel: Optional[str] = Field(default=None, alias="AVAILABLE_IN_CHANNEL")

    @field_validator("sku_number", "status_in_sap", mode="before")
    @classmethod
    def cast_identifier(cls, v):
        return coerce_identifier(v)

    @field_validator("sku_description", "available_in_channel", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        return None if _is_blank(v) else v
