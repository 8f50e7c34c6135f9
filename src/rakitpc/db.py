from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import CatalogUnavailableError, ComponentNotFoundError
from .schemas import Component, ComponentIn, ComponentType, Monitor

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SEED_DIR = Path(__file__).resolve().parent / "seed"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS components (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  type TEXT NOT NULL,
  price TEXT NOT NULL,
  image_url TEXT,
  specs TEXT,
  description TEXT,
  marketplace_link TEXT,
  marketplace_links TEXT,
  created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
  updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS monitors (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  title TEXT NOT NULL,
  description TEXT,
  resolution TEXT,
  refresh_rate INTEGER,
  panel_type TEXT,
  screen_size TEXT,
  price TEXT NOT NULL,
  rating TEXT DEFAULT '0',
  featured INTEGER DEFAULT 0,
  image_url TEXT,
  marketplace_links TEXT,
  created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
  updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

COMPONENT_COLUMNS = (
    "id, name, type, price, image_url, specs, description, "
    "marketplace_link, marketplace_links, created_at, updated_at"
)


def _decimal_text(value: float) -> str:
    # Stored like a DECIMAL(15,2) column.
    return f"{value:.2f}"


def _links_json(links) -> Optional[str]:
    if links is None:
        return None
    if hasattr(links, "model_dump"):
        links = links.model_dump(exclude_none=True)
    return json.dumps(links, ensure_ascii=False) if links else None


def _validate_rows(model: Type[ModelT], rows: Iterable[sqlite3.Row], table: str) -> List[ModelT]:
    """
    Validate stored rows, skipping the ones that no longer satisfy the model.

    A malformed row (non-positive price, unknown type, broken links JSON) is
    logged and left out; the remaining rows are still returned.

    Parameters:
        model: pydantic model to validate each row into
        rows: rows fetched from ``table``
        table: table name, used in the log line

    Returns:
        Valid models in row order
    """
    items: List[ModelT] = []
    for row in rows:
        data = dict(row)
        try:
            items.append(model.model_validate(data))
        except ValidationError as err:
            logger.warning(
                "skipping invalid %s row id=%s: %s",
                table,
                data.get("id"),
                err.errors(include_url=False),
            )
    return items


def load_seed(name: str) -> List[Dict[str, Any]]:
    with (SEED_DIR / name).open("r", encoding="utf-8") as f:
        return json.load(f)


class CatalogRepository:
    """
    Catalog Store

    SQLite-backed storage for components and monitors. Reads are validated into
    pydantic models; a database that cannot be read raises CatalogUnavailableError.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_schema(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)

    def count_components(self) -> int:
        return int(self._read("SELECT COUNT(*) AS n FROM components")[0]["n"])

    def seed(
        self,
        components: Iterable[Dict[str, Any]],
        monitors: Iterable[Dict[str, Any]],
    ) -> Dict[str, int]:
        """
        Replace all catalog rows with the given seed records.

        Returns:
            Number of rows inserted per table
        """
        component_rows = [
            (
                c["name"],
                c["type"],
                _decimal_text(float(c["price"])),
                c.get("image_url"),
                c.get("specs"),
                c.get("description"),
                c.get("marketplace_link"),
                _links_json(c.get("marketplace_links")),
            )
            for c in components
        ]
        monitor_rows = [
            (
                m["title"],
                m.get("description"),
                m.get("resolution"),
                m.get("refresh_rate"),
                str(m.get("screen_size", 0)),
                m.get("panel_type"),
                _decimal_text(float(m["price"])),
                str(m.get("rating", 0)),
                1 if m.get("featured") else 0,
                m.get("image_url"),
                _links_json(m.get("marketplace_links")),
            )
            for m in monitors
        ]
        with self._connect() as conn:
            conn.execute("DELETE FROM components")
            conn.execute("DELETE FROM monitors")
            conn.executemany(
                """
                INSERT INTO components (
                  name, type, price, image_url, specs, description, marketplace_link, marketplace_links
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                component_rows,
            )
            conn.executemany(
                """
                INSERT INTO monitors (
                  title, description, resolution, refresh_rate, screen_size, panel_type,
                  price, rating, featured, image_url, marketplace_links
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                monitor_rows,
            )
            conn.commit()
        return {"components": len(component_rows), "monitors": len(monitor_rows)}

    def seed_if_empty(self) -> bool:
        """Load the bundled seed data when the components table is empty."""
        if self.count_components() > 0:
            return False
        result = self.seed(load_seed("components.json"), load_seed("monitors.json"))
        logger.info(
            "catalog seeded: %d components, %d monitors",
            result["components"],
            result["monitors"],
        )
        return True

    def _read(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        if not self.db_path.exists():
            raise CatalogUnavailableError(f"catalog database not found: {self.db_path}")
        try:
            with self._connect() as conn:
                return conn.execute(sql, params).fetchall()
        except sqlite3.Error as err:
            raise CatalogUnavailableError(str(err)) from err

    def list_components(
        self,
        component_type: ComponentType | None = None,
        query: str | None = None,
    ) -> List[Component]:
        """
        List components, optionally narrowed by type and a case-insensitive name search.
        """
        clauses: List[str] = []
        params: List[Any] = []
        if component_type:
            clauses.append("type = ?")
            params.append(component_type)
        if query and query.strip():
            clauses.append("lower(name) LIKE ?")
            params.append(f"%{query.strip().lower()}%")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = self._read(
            f"SELECT {COMPONENT_COLUMNS} FROM components {where} ORDER BY id",
            tuple(params),
        )
        return _validate_rows(Component, rows, "components")

    def get_component(self, component_id: int) -> Component:
        rows = self._read(
            f"SELECT {COMPONENT_COLUMNS} FROM components WHERE id = ?",
            (component_id,),
        )
        if not rows:
            raise ComponentNotFoundError(component_id)
        try:
            return Component.model_validate(dict(rows[0]))
        except ValidationError as err:
            raise CatalogUnavailableError(f"component {component_id} is malformed: {err}") from err

    def create_component(self, data: ComponentIn) -> Component:
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO components (
                  name, type, price, image_url, specs, description, marketplace_link, marketplace_links
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data.name,
                    data.type,
                    _decimal_text(data.price),
                    data.image_url,
                    data.specs,
                    data.description,
                    data.marketplace_link,
                    _links_json(data.marketplace_links),
                ),
            )
            conn.commit()
            new_id = int(cursor.lastrowid)
        logger.info("component created: id=%d type=%s name=%s", new_id, data.type, data.name)
        return self.get_component(new_id)

    def update_component(self, component_id: int, data: ComponentIn) -> Component:
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE components SET
                  name = ?, type = ?, price = ?, image_url = ?, specs = ?, description = ?,
                  marketplace_link = ?, marketplace_links = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data.name,
                    data.type,
                    _decimal_text(data.price),
                    data.image_url,
                    data.specs,
                    data.description,
                    data.marketplace_link,
                    _links_json(data.marketplace_links),
                    component_id,
                ),
            )
            conn.commit()
        if cursor.rowcount == 0:
            raise ComponentNotFoundError(component_id)
        logger.info("component updated: id=%d", component_id)
        return self.get_component(component_id)

    def delete_component(self, component_id: int) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM components WHERE id = ?", (component_id,))
            conn.commit()
        if cursor.rowcount == 0:
            raise ComponentNotFoundError(component_id)
        logger.info("component deleted: id=%d", component_id)

    def list_monitors(self) -> List[Monitor]:
        rows = self._read(
            """
            SELECT
              id, title, description, resolution, refresh_rate, panel_type, screen_size,
              price, rating, featured, image_url, marketplace_links
            FROM monitors
            ORDER BY id
            """
        )
        return _validate_rows(Monitor, rows, "monitors")
