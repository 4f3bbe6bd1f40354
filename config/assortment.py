"""
Assortment constants shared by the store filter and the analysis engine.

Values here are fixed business rules, not environment settings.
Tunable thresholds live in config/settings.py.
"""

from datetime import datetime

# =============================================================================
# SAP STATUS
# =============================================================================

# Statuses that make an item a candidate for unpublishing
INACTIVE_STATUSES = ("Inactive", "Discontinued")


# =============================================================================
# SALES CHANNELS
# =============================================================================

# AVAILABLE_IN_CHANNEL values that make an item e-commerce eligible
ECOM_CHANNELS = ("Both", "Ecom")

# Store-only items should never be published online
STORE_ONLY_CHANNEL = "Store"


# =============================================================================
# STORES
# =============================================================================

# Sites excluded from the active store count regardless of plant data
EXCLUDED_SITE_NUMBERS = ("9011",)

# Legacy spreadsheet day zero (1900 leap-year-bug compatible)
SERIAL_DATE_EPOCH = datetime(1899, 12, 30)


# =============================================================================
# DS LOCATIONS
# =============================================================================
# Supply channels reported as "Inv 9801" / "Inv 9803". Summed over the full
# inventory feed, never part of the coverage math.

DS_LOCATION_PRIMARY = "9801"
DS_LOCATION_SECONDARY = "9803"


# =============================================================================
# INGESTION
# =============================================================================

# Required wire fields per record kind
REQUIRED_FIELDS = {
    "plant": ("SITE_NUMBER", "REGION", "ORGANIZATION_NUMBER", "OPEN_DATE", "CLOSE_DATE"),
    "inventory": ("sku", "availableQuantity", "supplyChannel.key"),
    "status": ("key", "published"),
    "product": ("SKU_NUMBER", "STATUS_IN_SAP", "AVAILABLE_IN_CHANNEL"),
}


# =============================================================================
# PERSISTENCE
# =============================================================================

PLANT_DATA_KEY = "plu_analyzer_plant_data"
PLANT_METADATA_KEY = "plu_analyzer_plant_metadata"
