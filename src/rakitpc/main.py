from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, configure_logging, load_settings
from .db import CatalogRepository
from .errors import CatalogUnavailableError, ComponentNotFoundError, InvalidBudgetError
from .schemas import (
    CompatibilityRequest,
    CompatibilityResponse,
    ComponentIn,
    ComponentType,
    ManualBuildRequest,
    MonitorPreset,
    RecommendRequest,
)
from .service import CatalogService

logger = logging.getLogger(__name__)


def _bootstrap_catalog(settings: Settings) -> CatalogRepository:
    repo = CatalogRepository(settings.db_path)
    repo.init_schema()
    if settings.seed_on_start:
        repo.seed_if_empty()
    logger.info("catalog ready at %s", settings.db_path)
    return repo


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    repo = _bootstrap_catalog(settings)
    service = CatalogService(repo, monitor_budget_max=settings.monitor_budget_max)

    app = FastAPI(title="RakitPC")
    app.state.settings = settings
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ComponentNotFoundError)
    async def _not_found(_request, exc: ComponentNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(InvalidBudgetError)
    async def _invalid_budget(_request, exc: InvalidBudgetError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(CatalogUnavailableError)
    async def _catalog_unavailable(_request, exc: CatalogUnavailableError):
        logger.error("catalog unavailable: %s", exc)
        return JSONResponse(status_code=503, content={"error": "catalog unavailable"})

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/components")
    def list_components(
        type: Optional[ComponentType] = None,
        q: Optional[str] = None,
    ):
        return [c.model_dump() for c in repo.list_components(type, q)]

    @app.get("/api/components/{component_id}")
    def get_component(component_id: int):
        return repo.get_component(component_id).model_dump()

    @app.post("/api/components", status_code=201)
    def create_component(payload: ComponentIn):
        return repo.create_component(payload).model_dump()

    @app.put("/api/components/{component_id}")
    def update_component(component_id: int, payload: ComponentIn):
        return repo.update_component(component_id, payload).model_dump()

    @app.delete("/api/components/{component_id}")
    def delete_component(component_id: int):
        repo.delete_component(component_id)
        return {"deleted": component_id}

    @app.get("/api/components/{component_id}/links")
    def component_links(component_id: int):
        return service.purchase_links(component_id)

    @app.get("/api/monitors")
    def list_monitors(q: str = "", preset: MonitorPreset = "all"):
        snapshot = service.monitors(q, preset)
        if snapshot.error:
            raise HTTPException(status_code=503, detail=snapshot.error)
        return [m.model_dump() for m in snapshot.items]

    @app.get("/api/allocation")
    def allocation(budget: str = Query(...)):
        return service.allocation(budget)

    @app.post("/api/recommend")
    def recommend(payload: RecommendRequest):
        return service.recommend(payload.budget, payload.platform, payload.gpu_vendor).model_dump()

    @app.post("/api/compatibility")
    def compatibility(payload: CompatibilityRequest):
        try:
            issues = service.compatibility(payload.cpu_id, payload.motherboard_id)
        except ValueError as err:
            raise HTTPException(status_code=400, detail=str(err)) from err
        return CompatibilityResponse(issues=issues).model_dump()

    @app.post("/api/builds/manual")
    def manual_build(payload: ManualBuildRequest):
        try:
            result = service.manual_build(payload.selection)
        except ValueError as err:
            raise HTTPException(status_code=400, detail=str(err)) from err
        return result.model_dump()

    return app


def run() -> None:
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
