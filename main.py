import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from application.service.nvd_service import NvdLookupService
from application.service.sbom_service import SbomService
from application.service.settings_service import SettingsService
from config import AppConfig
from core.exceptions import (
    NvdConfigurationError,
    NvdUpstreamError,
    SbomNotFoundError,
    SbomValidationError,
    SbomWorkbenchException,
)
from core.interface import INvdClient, ISbomRepository, ISettingsStore
from core.known_components import find_templates
from infrastructure.clients.nvd_client import NvdClient
from infrastructure.persistence.database import create_database_engine, create_session_factory
from infrastructure.persistence.env_file import EnvFileSettingsStore
from infrastructure.persistence.memory import InMemorySbomRepository
from infrastructure.persistence.repositories import SQLAlchemySbomRepository

logger = logging.getLogger(__name__)

STATUS_BY_EXCEPTION = {
    SbomValidationError: 400,
    SbomNotFoundError: 404,
    NvdConfigurationError: 400,
    NvdUpstreamError: 502,
}


def build_repository(config: AppConfig) -> ISbomRepository:
    """In-memory map by default, SQLAlchemy when a database URL is configured"""
    if not config.database_url:
        return InMemorySbomRepository()

    engine = create_database_engine(config.database_url)
    return SQLAlchemySbomRepository(create_session_factory(engine))


def _parse_id(raw_id: str) -> int:
    # Plain ASCII digits only; int() would also take "1_0", " 1" and "+1"
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise SbomNotFoundError(raw_id)
    return int(raw_id)


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise SbomValidationError("Request body must be valid JSON")


def create_app(
    config: Optional[AppConfig] = None,
    repository: Optional[ISbomRepository] = None,
    settings_store: Optional[ISettingsStore] = None,
    nvd_client: Optional[INvdClient] = None,
) -> FastAPI:
    """Factory function with dependency injection"""
    config = config or AppConfig.from_env()

    # Wire up adapters (OUTER HEXAGON)
    repository = repository or build_repository(config)
    settings_store = settings_store or EnvFileSettingsStore(config.env_file, initial_key=config.nvd_api_key)
    nvd_client = nvd_client or NvdClient(settings_store, base_url=config.nvd_base_url, timeout=config.nvd_timeout)

    sbom_service = SbomService(repository)
    nvd_service = NvdLookupService(nvd_client)
    settings_service = SettingsService(settings_store, nvd_client)

    app = FastAPI(title="SBOM Workbench")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration = (time.perf_counter() - start) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} in {duration:.0f}ms")
        return response

    @app.exception_handler(SbomWorkbenchException)
    async def handle_domain_error(request: Request, exc: SbomWorkbenchException):
        status_code = STATUS_BY_EXCEPTION.get(type(exc), 500)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=status_code, content={"message": exc.message, "code": exc.error_code})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "storage": type(repository).__name__,
            "nvdConfigured": settings_store.has_nvd_api_key()
        }

    # SBOM CRUD
    @app.get("/api/sboms")
    async def list_sboms():
        return [s.to_dict() for s in sbom_service.list()]

    @app.get("/api/sboms/{sbom_id}")
    async def get_sbom(sbom_id: str):
        return sbom_service.get(_parse_id(sbom_id)).to_dict()

    @app.post("/api/sboms", status_code=201)
    async def create_sbom(request: Request):
        payload = await _read_json(request)
        sbom = sbom_service.create(payload)
        logger.info(f"Created SBOM {sbom.id} ({sbom.name} {sbom.version})")
        return JSONResponse(status_code=201, content=sbom.to_dict())

    @app.patch("/api/sboms/{sbom_id}")
    async def update_sbom(sbom_id: str, request: Request):
        target_id = _parse_id(sbom_id)
        payload = await _read_json(request)
        return sbom_service.update(target_id, payload).to_dict()

    @app.delete("/api/sboms/{sbom_id}", status_code=204)
    async def delete_sbom(sbom_id: str):
        sbom_service.delete(_parse_id(sbom_id))
        return Response(status_code=204)

    # NVD proxy; sync handlers so the blocking HTTP calls run in the threadpool
    @app.get("/api/nvd/search")
    def search_nvd(keyword: Optional[str] = None):
        if not keyword:
            raise SbomValidationError("Keyword is required")
        return [o.to_dict() for o in nvd_service.search_products(keyword)]

    @app.get("/api/nvd/versions")
    def nvd_versions(cpe: Optional[str] = None):
        if not cpe:
            raise SbomValidationError("CPE is required")
        return [v.to_dict() for v in nvd_service.get_versions(cpe)]

    @app.get("/api/nvd/vulnerabilities")
    def nvd_vulnerabilities(cpe: Optional[str] = None):
        if not cpe:
            raise SbomValidationError("CPE is required")
        return [v.to_dict() for v in nvd_service.get_vulnerabilities(cpe)]

    # Settings
    @app.get("/api/settings")
    async def get_settings():
        return settings_service.status()

    @app.post("/api/settings/nvd-key")
    async def update_nvd_key(request: Request):
        payload = await _read_json(request) if await request.body() else {}
        result = await run_in_threadpool(settings_service.update_nvd_key, payload)
        return result.to_dict()

    @app.get("/api/components/templates")
    async def component_templates(query: str = "", version: Optional[str] = None):
        return find_templates(query, version)

    return app


if __name__ == "__main__":
    import uvicorn
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    app = create_app(config)
    logger.info("Starting SBOM Workbench...")
    logger.info(f"Storage: {'SQLAlchemy ' + config.database_url if config.database_url else 'in-memory'}")
    logger.info(f"NVD endpoint: {config.nvd_base_url}")
    uvicorn.run(app, host=config.host, port=config.port)
