"""
Analysis service: Core publish/unpublish recommendation logic.

Joins product master, publish status and inventory by PLU, computes
inventory coverage across active stores, and classifies each PLU.

Rules:
    - Publish: NOT published + SAP status NOT inactive + coverage >= 90%
    - Unpublish: IS published + SAP status inactive + out of stock >= 50%
    - No Action: everything else

Items outside the e-commerce channels never enter the main results.
Those that would need action are reported separately, and store-only
items that are published are audited as Unpublish.
"""

import re
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Iterator, Optional
import structlog

from config import settings
from config.assortment import (
    DS_LOCATION_PRIMARY,
    DS_LOCATION_SECONDARY,
    ECOM_CHANNELS,
    INACTIVE_STATUSES,
    STORE_ONLY_CHANNEL,
)
from models.analysis import (
    AnalysisOutput,
    AnalysisResult,
    AnalysisSummary,
    ChannelAuditResult,
    FilteredOutResult,
    Recommendation,
)
from models.records import InventoryRecord, ProductRecord, StatusRecord
from utils.text_utils import strip_plu_prefix

logger = structlog.get_logger(__name__)


PLU_PATTERN = re.compile(r"[0-9]{4}")
NO_ACTIVE_STORES_ERROR = "No active stores found"

ONE_DECIMAL = Decimal("0.1")
HUNDRED = Decimal("100")


def is_valid_plu(plu: str) -> bool:
    """Check if a PLU is exactly 4 digits."""
    return bool(PLU_PATTERN.fullmatch(plu))


def calculate_inventory_pct(stores_with_inventory: int, total_active_stores: int) -> float:
    """
    Coverage of active stores, rounded half-up to one decimal.

    2 of 4 stores → 50.0, 1 of 3 stores → 33.3
    """
    if total_active_stores <= 0:
        return 0.0
    pct = Decimal(stores_with_inventory) * HUNDRED / Decimal(total_active_stores)
    return float(pct.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


class InventoryIndex:
    """
    Per-PLU inventory lookups for one analysis run.

    stores_by_plu only covers active stores with positive stock.
    ds_quantities covers the full feed, active or not.
    """

    def __init__(self, inventory: Iterable[InventoryRecord], active_stores: set[str]):
        self.stores_by_plu: dict[str, set[str]] = defaultdict(set)
        self.ds_quantities: dict[str, dict[str, float]] = defaultdict(
            lambda: {DS_LOCATION_PRIMARY: 0.0, DS_LOCATION_SECONDARY: 0.0}
        )

        for row in inventory:
            channel = row.supply_channel_key

            if channel in (DS_LOCATION_PRIMARY, DS_LOCATION_SECONDARY):
                self.ds_quantities[row.sku][channel] += row.available_quantity

            if channel in active_stores and row.available_quantity > 0:
                self.stores_by_plu[row.sku].add(channel)

    def stores_with_inventory(self, plu: str) -> int:
        stores = self.stores_by_plu.get(plu)
        return len(stores) if stores else 0

    def ds_quantity(self, plu: str, channel: str) -> float:
        quantities = self.ds_quantities.get(plu)
        return quantities[channel] if quantities else 0.0


class AnalysisService:
    """
    PLU reconciliation and recommendation engine.

    Stateless between calls: every analyze() is a pure function of
    its inputs and the configured thresholds.
    """

    def __init__(self):
        self.publish_threshold = Decimal(str(settings.publish_threshold))  # 90
        self.unpublish_threshold = Decimal(str(settings.unpublish_threshold))  # 50

    def determine_recommendation(
        self,
        is_published: bool,
        sap_status: str,
        inventory_pct: float,
    ) -> Recommendation:
        """
        Classify a PLU.

        Args:
            is_published: Current publish status
            sap_status: STATUS_IN_SAP value
            inventory_pct: Coverage %, already rounded to one decimal

        Returns:
            PUBLISH, UNPUBLISH or NO_ACTION
        """
        is_inactive = sap_status in INACTIVE_STATUSES
        coverage = Decimal(str(inventory_pct))
        out_of_stock_pct = HUNDRED - coverage

        if not is_published and not is_inactive and coverage >= self.publish_threshold:
            return Recommendation.PUBLISH

        if is_published and is_inactive and out_of_stock_pct >= self.unpublish_threshold:
            return Recommendation.UNPUBLISH

        return Recommendation.NO_ACTION

    def analyze(
        self,
        inventory: list[InventoryRecord],
        status: list[StatusRecord],
        product: list[ProductRecord],
        active_stores: list[str],
    ) -> AnalysisOutput:
        """
        Analyze PLUs and determine publish/unpublish recommendations.

        Args:
            inventory: Stock rows per SKU x supply channel
            status: Publish status per SKU
            product: Product master, in priority order (first row per PLU wins)
            active_stores: Active site numbers

        Returns:
            AnalysisOutput with results, filtered out results,
            channel audit results and summary
        """
        active_set = set(active_stores)
        total_active_stores = len(active_set)

        if total_active_stores == 0:
            logger.warning("analysis_aborted_no_active_stores")
            return AnalysisOutput(
                summary=AnalysisSummary(active_stores=0, error=NO_ACTIVE_STORES_ERROR)
            )

        logger.info(
            "analyzing_plus",
            products=len(product),
            status_rows=len(status),
            inventory_rows=len(inventory),
            active_stores=total_active_stores
        )

        status_map = self._build_status_map(status)
        index = InventoryIndex(inventory, active_set)

        results: list[AnalysisResult] = []
        filtered_out: list[FilteredOutResult] = []

        for plu, row in self._unique_plus(product):
            description = strip_plu_prefix(row.sku_description)
            is_published = status_map.get(plu, False)
            stores_with_inventory = index.stores_with_inventory(plu)
            inventory_pct = calculate_inventory_pct(stores_with_inventory, total_active_stores)

            recommendation = self.determine_recommendation(
                is_published, row.status_in_sap, inventory_pct
            )

            if row.available_in_channel not in ECOM_CHANNELS:
                if recommendation != Recommendation.NO_ACTION:
                    filtered_out.append(FilteredOutResult(
                        plu=plu,
                        description=description,
                        sap_status=row.status_in_sap,
                        published=is_published,
                        inventory_pct=inventory_pct,
                        available_in_channel=row.available_in_channel or "",
                        would_recommend=recommendation,
                    ))
                continue

            results.append(AnalysisResult(
                plu=plu,
                description=description,
                sap_status=row.status_in_sap,
                published=is_published,
                inventory_pct=inventory_pct,
                stores_with_inventory=stores_with_inventory,
                total_active_stores=total_active_stores,
                inv_9801=index.ds_quantity(plu, DS_LOCATION_PRIMARY),
                inv_9803=index.ds_quantity(plu, DS_LOCATION_SECONDARY),
                recommendation=recommendation,
            ))

        channel_audit = self._audit(product, status_map, index, total_active_stores)
        summary = self.summarize(results, total_active_stores)

        logger.info(
            "analysis_complete",
            total_plus=summary.total_plus,
            to_publish=summary.to_publish,
            to_unpublish=summary.to_unpublish,
            no_action=summary.no_action,
            filtered_out=len(filtered_out),
            channel_mismatches=len(channel_audit)
        )

        return AnalysisOutput(
            results=results,
            filtered_out_results=filtered_out,
            channel_audit_results=channel_audit,
            summary=summary,
        )

    def audit_channel_mismatches(
        self,
        inventory: list[InventoryRecord],
        status: list[StatusRecord],
        product: list[ProductRecord],
        active_stores: list[str],
    ) -> list[ChannelAuditResult]:
        """
        Find store-only PLUs that are currently published.

        Every match is Unpublish, regardless of SAP status or inventory.
        Returns an empty list when there are no active stores.
        """
        active_set = set(active_stores)
        if not active_set:
            return []

        return self._audit(
            product,
            self._build_status_map(status),
            InventoryIndex(inventory, active_set),
            len(active_set),
        )

    def summarize(self, results: list[AnalysisResult], total_active_stores: int) -> AnalysisSummary:
        """Tally recommendations across eligible results."""
        counts = {rec: 0 for rec in Recommendation}
        for result in results:
            counts[result.recommendation] += 1

        return AnalysisSummary(
            total_plus=len(results),
            to_publish=counts[Recommendation.PUBLISH],
            to_publish_temp=counts[Recommendation.PUBLISH_TEMP],
            to_unpublish=counts[Recommendation.UNPUBLISH],
            no_action=counts[Recommendation.NO_ACTION],
            active_stores=total_active_stores,
        )

    # ===================
    # HELPERS
    # ===================

    def _audit(
        self,
        product: list[ProductRecord],
        status_map: dict[str, bool],
        index: InventoryIndex,
        total_active_stores: int,
    ) -> list[ChannelAuditResult]:
        audit: list[ChannelAuditResult] = []

        for plu, row in self._unique_plus(product):
            if row.available_in_channel != STORE_ONLY_CHANNEL:
                continue
            if not status_map.get(plu, False):
                continue

            audit.append(ChannelAuditResult(
                plu=plu,
                description=strip_plu_prefix(row.sku_description),
                sap_status=row.status_in_sap,
                published=True,
                inventory_pct=calculate_inventory_pct(
                    index.stores_with_inventory(plu), total_active_stores
                ),
                available_in_channel=row.available_in_channel,
                would_recommend=Recommendation.UNPUBLISH,
            ))

        return audit

    @staticmethod
    def _build_status_map(status: Iterable[StatusRecord]) -> dict[str, bool]:
        """SKU -> published. Last row wins on duplicate keys."""
        return {row.key: row.published for row in status}

    @staticmethod
    def _unique_plus(product: Iterable[ProductRecord]) -> Iterator[tuple[str, ProductRecord]]:
        """Yield (plu, row) for valid PLUs, first occurrence only."""
        seen: set[str] = set()
        for row in product:
            plu = row.sku_number
            if not is_valid_plu(plu) or plu in seen:
                continue
            seen.add(plu)
            yield plu, row


# Singleton instance
_analysis_service: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create AnalysisService instance."""
    global _analysis_service
    if _analysis_service is None:
        _analysis_service = AnalysisService()
    return _analysis_service
