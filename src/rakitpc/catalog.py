"""
Catalog Accessor

Fetch the full component (or monitor) list for one operation. No caching and no
retries: every call reads the store again. A failed read degrades to an empty
list plus an error message for the caller to display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from .errors import CatalogUnavailableError
from .schemas import Component, Monitor

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    def list_components(self) -> List[Component]: ...
    def list_monitors(self) -> List[Monitor]: ...


@dataclass(frozen=True)
class ComponentSnapshot:
    items: tuple[Component, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class MonitorSnapshot:
    items: tuple[Monitor, ...] = ()
    error: Optional[str] = None


@dataclass
class CatalogAccessor:
    """Reads a fresh snapshot from a catalog source on every call."""

    source: CatalogSource
    unavailable_message: str = field(default="catalog is unavailable")

    def fetch_components(self) -> ComponentSnapshot:
        """
        Fetch Components

        Read the full component list once. A CatalogUnavailableError is logged
        and turned into an empty snapshot carrying the error message.

        Returns:
            Snapshot with the items, or empty items and ``error`` set
        """
        try:
            items = self.source.list_components()
        except CatalogUnavailableError as err:
            logger.warning("component fetch failed: %s", err)
            return ComponentSnapshot(error=f"{self.unavailable_message}: {err}")
        return ComponentSnapshot(items=tuple(items))

    def fetch_monitors(self) -> MonitorSnapshot:
        """
        Fetch Monitors

        Same contract as ``fetch_components`` for the monitor table.

        Returns:
            Snapshot with the items, or empty items and ``error`` set
        """
        try:
            items = self.source.list_monitors()
        except CatalogUnavailableError as err:
            logger.warning("monitor fetch failed: %s", err)
            return MonitorSnapshot(error=f"{self.unavailable_message}: {err}")
        return MonitorSnapshot(items=tuple(items))
