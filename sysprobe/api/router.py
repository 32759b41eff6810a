"""FastAPI application exposing resource snapshots and diagnostics."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, Response

from sysprobe.config import SysprobeConfig, get_config
from sysprobe.engine.resolver import (
    METRIC_ACCESSORS,
    RAW_OUTPUTS,
    ResourceResolver,
    create_resolver,
)
from sysprobe.errors import SysprobeError
from sysprobe.net.connectivity import check_connectivity

SNAPSHOT_MODES = {"auto", "command"}


def _unavailable(exc: SysprobeError) -> HTTPException:
    return HTTPException(status_code=503, detail=str(exc))


def create_app(
    *,
    resolver: ResourceResolver | None = None,
    config: SysprobeConfig | None = None,
) -> FastAPI:
    config = config or get_config()
    engine = resolver if resolver is not None else create_resolver(config)

    router = APIRouter()

    # Handlers are synchronous so FastAPI runs the blocking probes in its
    # threadpool.
    @router.get("/v1/snapshot")
    def snapshot(mode: str = Query(default="auto")) -> JSONResponse:
        if mode not in SNAPSHOT_MODES:
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported mode '{mode}' (expected auto or command)",
            )
        try:
            if mode == "command":
                result = engine.resolve_snapshot_command_only()
            else:
                result = engine.resolve_snapshot()
        except SysprobeError as exc:
            raise _unavailable(exc) from exc
        return JSONResponse(result.model_dump(mode="json"))

    @router.get("/v1/metrics/{name}")
    def metric(name: str) -> dict[str, Any]:
        accessor = METRIC_ACCESSORS.get(name)
        if accessor is None:
            raise HTTPException(status_code=404, detail=f"Unknown metric '{name}'")
        try:
            value = accessor(engine)
        except SysprobeError as exc:
            raise _unavailable(exc) from exc
        return {"metric": name, "value": value}

    @router.get("/v1/raw/{utility}")
    def raw_output(utility: str) -> Response:
        reader = RAW_OUTPUTS.get(utility)
        if reader is None:
            raise HTTPException(status_code=404, detail=f"Unknown utility '{utility}'")
        try:
            content = reader(engine)
        except SysprobeError as exc:
            raise _unavailable(exc) from exc
        return Response(content, media_type="text/plain")

    @router.get("/v1/connectivity")
    def connectivity(
        domain: str = Query(..., min_length=1),
        port: str = Query(default=""),
        timeout: int = Query(default=config.connect_timeout),
    ) -> JSONResponse:
        report = check_connectivity(domain, port, timeout)
        return JSONResponse(report.to_dict())

    app = FastAPI(title="Container Resource Probe API", version="0.1.0")
    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Convenience application instance for ASGI servers
app = create_app()
