"""
Plant data API routes.

The plant master is uploaded once, persisted, and reused
to derive the active store set for every analysis.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.plant import ActiveStore, PlantDataStatus, PlantUploadRequest
from parsers import parse_plant_records
from services.plant_store_service import get_plant_store_service
from services.store_filter_service import get_active_store_details, get_active_stores
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


# ===================
# ROUTES
# ===================

@router.get("", response_model=PlantDataStatus)
async def get_plant_data_status():
    """
    Get the state of the persisted plant data.

    Returns empty status (no metadata, zero counts) when nothing is stored.
    """
    try:
        stored = get_plant_store_service().load()
        if stored is None:
            return PlantDataStatus()

        return PlantDataStatus(
            metadata=stored.metadata,
            row_count=len(stored.records),
            active_stores=len(get_active_stores(stored.records)),
        )

    except Exception as e:
        return handle_error(e)


@router.put("", response_model=PlantDataStatus)
async def upload_plant_data(request: PlantUploadRequest):
    """
    Validate and persist plant master rows.

    Replaces any previously stored plant data.
    """
    try:
        records = parse_plant_records(request.records).unwrap()
        metadata = get_plant_store_service().save(records, request.source_file)

        return PlantDataStatus(
            metadata=metadata,
            row_count=len(records),
            active_stores=len(get_active_stores(records)),
        )

    except Exception as e:
        return handle_error(e)


@router.delete("", status_code=204)
async def clear_plant_data():
    """Clear persisted plant data."""
    try:
        get_plant_store_service().clear()
        return None

    except Exception as e:
        return handle_error(e)


@router.get("/active-stores", response_model=list[ActiveStore])
async def list_active_stores(
    search: Optional[str] = Query(None, description="Filter by site number, description or region")
):
    """
    List active stores from the persisted plant data.

    Sorted by site number, one entry per site.
    """
    try:
        stored = get_plant_store_service().load()
        if stored is None:
            raise PlantDataNotFoundError("plant_store")

        return get_active_store_details(stored.records, search=search)

    except Exception as e:
        return handle_error(e)
