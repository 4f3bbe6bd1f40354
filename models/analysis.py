"""
Analysis schemas for publish/unpublish recommendations.

Output of the reconciliation engine: per-PLU results, e-commerce
ineligible items that would need action, store-only items that are
published, and the summary tally.
"""

from pydantic import Field
from typing import Any, Optional
from enum import Enum

from models.base import BaseSchema


class Recommendation(str, Enum):
    """Recommended publish action for a PLU."""
    PUBLISH = "Publish"
    PUBLISH_TEMP = "Publish - TEMP"  # Reserved, classification never returns it
    UNPUBLISH = "Unpublish"
    NO_ACTION = "No Action"


class AnalysisResult(BaseSchema):
    """Recommendation for one e-commerce eligible PLU."""

    plu: str
    description: str = ""
    sap_status: str = ""
    published: bool

    # Coverage
    inventory_pct: float = Field(..., description="Active stores with stock / active stores x 100")
    stores_with_inventory: int
    total_active_stores: int

    # DS locations, summed over the full inventory feed
    inv_9801: float = 0
    inv_9803: float = 0

    recommendation: Recommendation


class FilteredOutResult(BaseSchema):
    """PLU outside the e-commerce channels that would otherwise need action."""

    plu: str
    description: str = ""
    sap_status: str = ""
    published: bool
    inventory_pct: float
    available_in_channel: str = ""
    would_recommend: Recommendation


class ChannelAuditResult(FilteredOutResult):
    """Store-only PLU that is currently published. Always Unpublish."""

    would_recommend: Recommendation = Recommendation.UNPUBLISH


class AnalysisSummary(BaseSchema):
    """Tally of recommendations across eligible results."""

    total_plus: int = 0
    to_publish: int = 0
    to_publish_temp: int = 0
    to_unpublish: int = 0
    no_action: int = 0
    active_stores: int = 0
    error: Optional[str] = None


class AnalysisOutput(BaseSchema):
    """Complete analysis response."""

    results: list[AnalysisResult] = Field(default_factory=list)
    filtered_out_results: list[FilteredOutResult] = Field(default_factory=list)
    channel_audit_results: list[ChannelAuditResult] = Field(default_factory=list)
    summary: AnalysisSummary


class AnalysisRequest(BaseSchema):
    """
    Raw rows for one analysis run.

    Active stores come from, in order: active_stores, plant rows,
    then persisted plant data.
    """

    inventory: list[dict[str, Any]]
    status: list[dict[str, Any]]
    product: list[dict[str, Any]]
    plant: Optional[list[dict[str, Any]]] = None
    active_stores: Optional[list[str]] = None
