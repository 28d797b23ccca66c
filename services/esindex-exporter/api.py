"""FastAPI app serving the Prometheus metrics endpoint.

Routes:
  /          -- landing page linking to /metrics
  /metrics   -- Prometheus text exposition of the exporter registry
  /_health   -- Docker healthcheck

The server is started as a background asyncio task next to the check loop.
"""

from __future__ import annotations

import asyncio

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, Response

from shared.log import get_logger

from config import ExporterSettings
from metrics import IndexGauge

logger = get_logger("api")

LANDING_PAGE = """<html>
<head><title>ES Index Exporter</title></head>
<body>
<h1>ES Index Exporter</h1>
<p>Index prefix: <code>{prefix}</code></p>
<p>Monitored window: {window} ({timezone})</p>
<p><a href="/metrics">Metrics</a></p>
</body>
</html>
"""


def create_app(gauge: IndexGauge, settings: ExporterSettings) -> FastAPI:
    """Build the FastAPI app around an already constructed gauge."""

    app = FastAPI(
        title="ES Index Exporter",
        description="Exports whether today's Elasticsearch index exists.",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
    )

    page = LANDING_PAGE.format(
        prefix=settings.es_index_prefix,
        window=settings.window_label,
        timezone=settings.timezone,
    )

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index() -> str:
        return page

    @app.get("/metrics", tags=["metrics"])
    async def metrics() -> Response:
        return Response(content=gauge.render(), media_type=gauge.content_type)

    @app.get("/_health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app


async def start_api_server(
    app: FastAPI,
    host: str = "0.0.0.0",
    port: int = 9184,
    shutdown_event: asyncio.Event | None = None,
) -> None:
    """Run the metrics server as an asyncio task.

    Uses uvicorn with the programmatic Server API so it shares the event
    loop with the check loop. Returns once the server has stopped.
    """
    config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        log_level="warning",
        access_log=False,
    )
    server = uvicorn.Server(config)

    logger.info("metrics_server_starting", host=host, port=port)

    serve_task = asyncio.create_task(server.serve())

    if shutdown_event:
        shutdown_task = asyncio.create_task(shutdown_event.wait())
        done, pending = await asyncio.wait(
            [serve_task, shutdown_task],
            return_when=asyncio.FIRST_COMPLETED,
        )
        if shutdown_task in done:
            server.should_exit = True
            await serve_task
        for task in pending:
            task.cancel()
        if serve_task in done:
            # Propagate a crash from server.serve() to the supervisor
            serve_task.result()
    else:
        await serve_task

    logger.info("metrics_server_stopped")
