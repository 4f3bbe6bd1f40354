"""
Business logic services.

Each service handles one domain area.
"""

from services.analysis_service import (
    AnalysisService,
    get_analysis_service,
    is_valid_plu,
    calculate_inventory_pct,
)
from services.store_filter_service import (
    get_active_stores,
    get_active_store_count,
    get_active_store_details,
    parse_plant_date,
)
from services.plant_store_service import PlantStoreService, get_plant_store_service

__all__ = [
    "AnalysisService",
    "get_analysis_service",
    "is_valid_plu",
    "calculate_inventory_pct",
    "get_active_stores",
    "get_active_store_count",
    "get_active_store_details",
    "parse_plant_date",
    "PlantStoreService",
    "get_plant_store_service",
]
