"""
Plant store service: Persists the plant master between sessions.

Plant data changes rarely, so it is stored once and reused for every
analysis. Data and metadata are two JSON documents under fixed keys
in the configured store directory.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional
import structlog

from pydantic import ValidationError as PydanticValidationError

from config import settings
from config.assortment import PLANT_DATA_KEY, PLANT_METADATA_KEY
from exceptions import PlantStoreError
from models.plant import PlantMetadata, StoredPlantData
from models.records import PlantRecord

logger = structlog.get_logger(__name__)


class PlantStoreService:
    """
    Plant data persistence.

    A missing store is not an error (load returns None);
    unreadable or unwritable files raise PlantStoreError.
    """

    def __init__(self, store_dir: Optional[str] = None):
        self.store_dir = Path(store_dir or settings.plant_store_dir)
        self.data_path = self.store_dir / f"{PLANT_DATA_KEY}.json"
        self.metadata_path = self.store_dir / f"{PLANT_METADATA_KEY}.json"

    def save(self, records: list[PlantRecord], source_file: str) -> PlantMetadata:
        """
        Persist plant records, replacing anything stored.

        Args:
            records: Validated plant rows
            source_file: Name of the file the rows came from

        Returns:
            PlantMetadata written alongside the data

        Raises:
            PlantStoreError: If the files cannot be written
        """
        metadata = PlantMetadata(last_updated=datetime.now(), source_file=source_file)
        data = [r.model_dump(mode="json", by_alias=True) for r in records]

        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            self.data_path.write_text(json.dumps(data), encoding="utf-8")
            self.metadata_path.write_text(metadata.model_dump_json(), encoding="utf-8")
        except OSError as e:
            logger.error("plant_store_save_failed", path=str(self.store_dir), error=str(e))
            raise PlantStoreError("save", str(e), details={"path": str(self.store_dir)})

        logger.info(
            "plant_data_saved",
            rows=len(records),
            source_file=source_file
        )

        return metadata

    def load(self) -> Optional[StoredPlantData]:
        """
        Load persisted plant data.

        Returns:
            StoredPlantData, or None if nothing is stored

        Raises:
            PlantStoreError: If stored files are unreadable or corrupt
        """
        if not self.has_data():
            logger.debug("plant_data_not_stored", path=str(self.store_dir))
            return None

        try:
            raw_data = json.loads(self.data_path.read_text(encoding="utf-8"))
            raw_metadata = json.loads(self.metadata_path.read_text(encoding="utf-8"))
            stored = StoredPlantData(
                records=[PlantRecord.model_validate(row) for row in raw_data],
                metadata=PlantMetadata.model_validate(raw_metadata),
            )
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error("plant_store_load_failed", path=str(self.store_dir), error=str(e))
            raise PlantStoreError("load", str(e), details={"path": str(self.store_dir)})

        logger.debug("plant_data_loaded", rows=len(stored.records))
        return stored

    def clear(self) -> bool:
        """
        Remove persisted plant data.

        Returns:
            True if anything was removed

        Raises:
            PlantStoreError: If the files cannot be removed
        """
        removed = False
        try:
            for path in (self.data_path, self.metadata_path):
                if path.exists():
                    path.unlink()
                    removed = True
        except OSError as e:
            logger.error("plant_store_clear_failed", path=str(self.store_dir), error=str(e))
            raise PlantStoreError("clear", str(e), details={"path": str(self.store_dir)})

        logger.info("plant_data_cleared", removed=removed)
        return removed

    def has_data(self) -> bool:
        """Check if both plant data and metadata are stored."""
        return self.data_path.exists() and self.metadata_path.exists()


# Singleton instance
_plant_store_service: Optional[PlantStoreService] = None


def get_plant_store_service() -> PlantStoreService:
    """Get or create PlantStoreService instance."""
    global _plant_store_service
    if _plant_store_service is None:
        _plant_store_service = PlantStoreService()
    return _plant_store_service
