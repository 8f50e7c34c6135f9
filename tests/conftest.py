from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from rakitpc.config import Settings
from rakitpc.db import CatalogRepository
from rakitpc.main import create_app
from rakitpc.schemas import Component


@pytest.fixture
def make_component() -> Callable[..., Component]:
    counter = {"next": 1}

    def _make(type: str, price, name: str | None = None, specs: str = "", **extra) -> Component:
        component_id = extra.pop("id", counter["next"])
        counter["next"] = max(counter["next"], component_id) + 1
        return Component(
            id=component_id,
            name=name or f"{type} {component_id}",
            type=type,
            price=price,
            specs=specs,
            **extra,
        )

    return _make


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "catalog.db"


@pytest.fixture
def seeded_repo(db_path: Path) -> CatalogRepository:
    repo = CatalogRepository(db_path)
    repo.init_schema()
    repo.seed_if_empty()
    return repo


@pytest.fixture
def client(db_path: Path) -> TestClient:
    app = create_app(Settings(db_path=db_path))
    return TestClient(app)
