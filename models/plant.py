"""
Plant data schemas.

Persisted plant master, its provenance, and active store listings.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import Field

from models.base import BaseSchema
from models.records import PlantRecord


class PlantMetadata(BaseSchema):
    """Provenance of the persisted plant data."""

    last_updated: datetime
    source_file: str


class StoredPlantData(BaseSchema):
    """Plant rows as persisted, with their metadata."""

    records: list[PlantRecord]
    metadata: PlantMetadata


class PlantUploadRequest(BaseSchema):
    """Plant master rows to persist."""

    source_file: str = Field(..., min_length=1)
    records: list[dict[str, Any]]


class PlantDataStatus(BaseSchema):
    """State of the persisted plant data."""

    metadata: Optional[PlantMetadata] = None
    row_count: int = 0
    active_stores: int = 0


class ActiveStore(BaseSchema):
    """Active site with its description, for store listings."""

    site_number: str
    site_description: str = ""
    region: str = ""
    organization_number: str = ""
