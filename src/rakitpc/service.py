from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from .assembly import ManualBuildSelection
from .builder import allocate_budget, check_compatibility, recommend_build
from .catalog import CatalogAccessor, MonitorSnapshot
from .db import CatalogRepository
from .errors import validate_budget
from .marketplace import format_idr, marketplace_url
from .monitors import DEFAULT_BUDGET_MAX, filter_monitors
from .schemas import (
    Component,
    ComponentType,
    GpuVendorFilter,
    ManualBuildResponse,
    MonitorPreset,
    PlatformFilter,
    RecommendResponse,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Glue between the REST layer, the catalog store and the pure builder functions."""

    def __init__(
        self,
        repo: CatalogRepository,
        monitor_budget_max: float = DEFAULT_BUDGET_MAX,
    ):
        self.repo = repo
        self.accessor = CatalogAccessor(repo)
        self.monitor_budget_max = monitor_budget_max

    def allocation(self, budget) -> Dict[str, float]:
        """
        Allocation View

        Per-category price caps for a budget, without touching the catalog.

        Parameters:
            budget: Raw budget (number or numeric string)

        Returns:
            Category -> max price
        """
        return allocate_budget(validate_budget(budget)).to_dict()

    def recommend(
        self,
        budget,
        platform: PlatformFilter = "all",
        gpu_vendor: GpuVendorFilter = "all",
    ) -> RecommendResponse:
        """
        Recommend

        Validate the budget, take a catalog snapshot and fill one component per
        category. An unreadable catalog yields an empty build with
        ``catalog_error`` set instead of an exception.

        Parameters:
            budget: Raw budget (number or numeric string)
            platform: "all", "intel" or "amd"
            gpu_vendor: "all", "nvidia" or "amd"

        Returns:
            Build, the allocation used for it, and the catalog error if any
        """
        total_budget = validate_budget(budget)
        allocation = allocate_budget(total_budget)
        snapshot = self.accessor.fetch_components()
        build = recommend_build(
            snapshot.items,
            total_budget,
            platform,
            gpu_vendor,
            allocation=allocation,
        )
        logger.debug(
            "recommendation: budget=%.2f platform=%s gpu=%s picked=%d total=%.2f",
            total_budget,
            platform,
            gpu_vendor,
            len(build.parts()),
            build.total_price,
        )
        return RecommendResponse(
            build=build,
            allocation=allocation.to_dict(),
            catalog_error=snapshot.error,
        )

    def _resolve(
        self,
        component_id: Optional[int],
        expected_type: ComponentType,
    ) -> Optional[Component]:
        if component_id is None:
            return None
        component = self.repo.get_component(component_id)
        if component.type != expected_type:
            raise ValueError(
                f"component {component.id} is a {component.type}, not a {expected_type}"
            )
        return component

    def compatibility(
        self,
        cpu_id: Optional[int],
        motherboard_id: Optional[int],
    ) -> List[str]:
        """
        Compatibility Check

        Resolve the two ids and run the socket check on them.

        Parameters:
            cpu_id: Id of a CPU component, or None
            motherboard_id: Id of a Motherboard component, or None

        Returns:
            Issue messages, empty when compatible or when either id is missing

        Raises ComponentNotFoundError for an unknown id and ValueError when an
        id belongs to a component of another category.
        """
        return check_compatibility(
            self._resolve(cpu_id, "CPU"),
            self._resolve(motherboard_id, "Motherboard"),
        )

    def manual_build(
        self,
        selection: Mapping[ComponentType, Optional[int]],
    ) -> ManualBuildResponse:
        """
        Manual Build

        Resolve picked ids and report total and issues. A component picked under
        the wrong category is rejected with ValueError.

        Parameters:
            selection: Category -> component id (None leaves the slot empty)

        Returns:
            Resolved selection, total price and compatibility issues
        """
        build = ManualBuildSelection()
        for component_type, component_id in selection.items():
            component = self._resolve(component_id, component_type)
            if component is None:
                continue
            build.pick(component)
        return ManualBuildResponse(
            selection=build.as_dict(),
            total_price=build.total_price(),
            issues=build.issues(),
        )

    def monitors(self, query: str = "", preset: MonitorPreset = "all") -> MonitorSnapshot:
        """
        Monitor Browsing

        Parameters:
            query: Case-insensitive search over title and description
            preset: "all", "gaming", "professional" or "budget"

        Returns:
            Filtered snapshot, or the failed snapshot unchanged when the catalog is unreadable
        """
        snapshot = self.accessor.fetch_monitors()
        if snapshot.error:
            return snapshot
        items = filter_monitors(snapshot.items, query, preset, self.monitor_budget_max)
        return MonitorSnapshot(items=tuple(items))

    def purchase_links(self, component_id: int) -> dict:
        """
        Purchase Links

        Parameters:
            component_id: Catalog id

        Returns:
            Name, formatted price and one URL per marketplace (stored link or search fallback)
        """
        component = self.repo.get_component(component_id)
        return {
            "id": component.id,
            "name": component.name,
            "price_label": format_idr(component.price),
            "links": {
                platform: marketplace_url(component.name, component.marketplace_links, platform)
                for platform in ("shopee", "tokopedia", "lazada")
            },
        }
