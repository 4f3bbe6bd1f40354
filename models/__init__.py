"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    RecordSchema,
)
from models.records import (
    PlantRecord,
    InventoryRecord,
    StatusRecord,
    ProductRecord,
)
from models.plant import (
    PlantMetadata,
    StoredPlantData,
    PlantUploadRequest,
    PlantDataStatus,
    ActiveStore,
)
from models.analysis import (
    Recommendation,
    AnalysisResult,
    FilteredOutResult,
    ChannelAuditResult,
    AnalysisSummary,
    AnalysisOutput,
    AnalysisRequest,
)

__all__ = [
    # Base
    "BaseSchema",
    "RecordSchema",

    # Records
    "PlantRecord",
    "InventoryRecord",
    "StatusRecord",
    "ProductRecord",

    # Plant
    "PlantMetadata",
    "StoredPlantData",
    "PlantUploadRequest",
    "PlantDataStatus",
    "ActiveStore",

    # Analysis
    "Recommendation",
    "AnalysisResult",
    "FilteredOutResult",
    "ChannelAuditResult",
    "AnalysisSummary",
    "AnalysisOutput",
    "AnalysisRequest",
]
