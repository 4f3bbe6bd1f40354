"""
Record parsers module.

Turns raw feed rows into typed records at the ingestion boundary.
"""

from parsers.record_parser import (
    parse_records,
    parse_plant_records,
    parse_inventory_records,
    parse_status_records,
    parse_product_records,
    RecordParseResult,
    RecordParseError,
)

__all__ = [
    "parse_records",
    "parse_plant_records",
    "parse_inventory_records",
    "parse_status_records",
    "parse_product_records",
    "RecordParseResult",
    "RecordParseError",
]
