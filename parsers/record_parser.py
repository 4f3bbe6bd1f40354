"""
Record parser for the four analysis feeds.

Validates raw row mappings (as delivered by an upload or an API client)
into typed records. Failures are collected per row rather than raised,
so callers get either clean records or a full list of what is wrong.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Mapping, TypeVar
import structlog

from pydantic import AliasChoices, BaseModel, ValidationError as PydanticValidationError

from config.assortment import REQUIRED_FIELDS
from exceptions import RecordValidationError
from models.records import (
    PlantRecord,
    InventoryRecord,
    StatusRecord,
    ProductRecord,
)

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

RECORD_MODELS: dict[str, type[BaseModel]] = {
    "plant": PlantRecord,
    "inventory": InventoryRecord,
    "status": StatusRecord,
    "product": ProductRecord,
}


@dataclass
class RecordParseError:
    """Single validation error from parsing."""
    row: int
    field: str
    error: str


@dataclass
class RecordParseResult(Generic[RecordT]):
    """Result of parsing one feed."""
    kind: str
    records: list[RecordT] = field(default_factory=list)
    errors: list[RecordParseError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no errors occurred."""
        return len(self.errors) == 0

    @property
    def row_count(self) -> int:
        return len(self.records)

    def error_dicts(self) -> list[dict]:
        return [
            {"row": e.row, "field": e.field, "error": e.error}
            for e in self.errors
        ]

    def unwrap(self) -> list[RecordT]:
        """
        Return records, or raise if parsing failed.

        Raises:
            RecordValidationError: If any row failed validation
        """
        if not self.success:
            raise RecordValidationError(self.kind, self.error_dicts())
        return self.records


def accepted_names(model: type[BaseModel], column: str) -> frozenset[str]:
    """
    Every key the model accepts for the field that reads column.

    "supplyChannel.key" -> {"supplyChannel.key", "supplyChannel_key", "supply_channel_key"}
    """
    for name, info in model.model_fields.items():
        names = {name}
        if info.alias:
            names.add(info.alias)
        alias = info.validation_alias
        if isinstance(alias, str):
            names.add(alias)
        elif isinstance(alias, AliasChoices):
            names.update(choice for choice in alias.choices if isinstance(choice, str))
        if column in names:
            return frozenset(names)
    return frozenset((column,))


def _has_any(row: Mapping[str, Any], names: frozenset[str]) -> bool:
    return any(name in row for name in names)


def parse_records(kind: str, rows: Iterable[Mapping[str, Any]]) -> RecordParseResult:
    """
    Parse raw rows into typed records.

    Args:
        kind: One of "plant", "inventory", "status", "product"
        rows: Row mappings keyed by wire column names

    Returns:
        RecordParseResult with records and any errors

    Raises:
        KeyError: If kind is not a known record kind
    """
    model = RECORD_MODELS[kind]
    required = {col: accepted_names(model, col) for col in REQUIRED_FIELDS[kind]}
    rows = list(rows)

    logger.debug("parsing_records", kind=kind, rows=len(rows))

    result = RecordParseResult(kind=kind)

    if not rows:
        result.errors.append(RecordParseError(
            row=0,
            field="records",
            error="No records supplied"
        ))
        return result

    # Column check against the first row, the same way a file header is checked
    missing = [col for col, names in required.items() if not _has_any(rows[0], names)]
    if missing:
        result.errors.append(RecordParseError(
            row=0,
            field="columns",
            error=f"Missing required columns: {', '.join(missing)}"
        ))
        return result

    for idx, row in enumerate(rows):
        row_num = idx + 1

        absent = [col for col, names in required.items() if not _has_any(row, names)]
        if absent:
            result.errors.extend(
                RecordParseError(row=row_num, field=col, error="Required field is missing")
                for col in absent
            )
            continue

        try:
            result.records.append(model.model_validate(dict(row)))
        except PydanticValidationError as e:
            for err in e.errors():
                result.errors.append(RecordParseError(
                    row=row_num,
                    field=".".join(str(part) for part in err["loc"]) or "row",
                    error=err["msg"],
                ))

    logger.info(
        "records_parsed",
        kind=kind,
        record_count=len(result.records),
        error_count=len(result.errors),
        success=result.success
    )

    return result


def parse_plant_records(rows: Iterable[Mapping[str, Any]]) -> RecordParseResult[PlantRecord]:
    return parse_records("plant", rows)


def parse_inventory_records(rows: Iterable[Mapping[str, Any]]) -> RecordParseResult[InventoryRecord]:
    return parse_records("inventory", rows)


def parse_status_records(rows: Iterable[Mapping[str, Any]]) -> RecordParseResult[StatusRecord]:
    return parse_records("status", rows)


def parse_product_records(rows: Iterable[Mapping[str, Any]]) -> RecordParseResult[ProductRecord]:
    return parse_records("product", rows)
