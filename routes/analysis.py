"""
Analysis API routes.

Runs the publish/unpublish analysis over the supplied feeds.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.analysis import AnalysisOutput, AnalysisRequest, ChannelAuditResult
from parsers import (
    parse_inventory_records,
    parse_plant_records,
    parse_product_records,
    parse_status_records,
)
from services.analysis_service import get_analysis_service
from services.plant_store_service import get_plant_store_service
from services.store_filter_service import get_active_stores
from exceptions import AppError, PlantDataNotFoundError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def resolve_active_stores(request: AnalysisRequest) -> list[str]:
    """
    Active stores for a request.

    Explicit list first, then plant rows in the request,
    then persisted plant data.

    Raises:
        RecordValidationError: If supplied plant rows are invalid
        PlantDataNotFoundError: If no source of plant data exists
    """
    if request.active_stores is not None:
        return [str(s).strip() for s in request.active_stores]

    if request.plant is not None:
        return get_active_stores(parse_plant_records(request.plant).unwrap())

    stored = get_plant_store_service().load()
    if stored is None:
        raise PlantDataNotFoundError("plant_store")

    return get_active_stores(stored.records)


def _parse_feeds(request: AnalysisRequest):
    inventory = parse_inventory_records(request.inventory).unwrap()
    status = parse_status_records(request.status).unwrap()
    product = parse_product_records(request.product).unwrap()
    return inventory, status, product


# ===================
# ROUTES
# ===================

@router.post("", response_model=AnalysisOutput)
async def run_analysis(request: AnalysisRequest):
    """
    Run the publish/unpublish analysis.

    Returns eligible results, e-commerce ineligible items that would
    need action, published store-only items, and a summary. When no
    store is active the summary carries an error and all lists are empty.
    """
    try:
        inventory, status, product = _parse_feeds(request)
        active_stores = resolve_active_stores(request)

        service = get_analysis_service()
        return service.analyze(inventory, status, product, active_stores)

    except Exception as e:
        return handle_error(e)


@router.post("/channel-audit", response_model=list[ChannelAuditResult])
async def run_channel_audit(request: AnalysisRequest):
    """
    List store-only PLUs that are currently published.

    Every row is an Unpublish recommendation.
    """
    try:
        inventory, status, product = _parse_feeds(request)
        active_stores = resolve_active_stores(request)

        service = get_analysis_service()
        return service.audit_channel_mismatches(inventory, status, product, active_stores)

    except Exception as e:
        return handle_error(e)
