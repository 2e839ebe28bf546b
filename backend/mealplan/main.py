"""Meal Plan Server - Entry point.

Runs the MCP server with HTTP transport, plus plain JSON endpoints for
exporting and importing the whole application document.
"""

import json
import logging
import os

import uvicorn
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from .core.models import ExportBundle
from .shell.mcp_server import mcp, get_session


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ==================== Route Handlers ====================


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "healthy", "service": "mealplan-mcp"})


async def export_data(request: Request) -> JSONResponse:
    """Return the whole application document."""
    try:
        session = get_session()
    except RuntimeError as e:
        logger.error("Export failed: %s", str(e))
        return JSONResponse({"error": "Stored data could not be loaded."}, status_code=500)

    return JSONResponse(session.export_bundle().to_document())


async def import_data(request: Request) -> JSONResponse:
    """Replace the diet plan, daily logs, goals and catalog with an uploaded document."""
    try:
        body = await request.json()
    except json.JSONDecodeError:
        return JSONResponse({"error": "Body must be a JSON document"}, status_code=400)

    if not isinstance(body, dict):
        return JSONResponse({"error": "Invalid data file."}, status_code=400)

    try:
        bundle = ExportBundle.model_validate(body)
    except ValidationError as e:
        logger.warning("Rejected import: %d validation errors", e.error_count())
        return JSONResponse(
            {"error": "Invalid data file.", "details": e.errors(include_url=False, include_context=False)},
            status_code=400,
        )

    try:
        session = get_session()
    except RuntimeError as e:
        logger.error("Import failed: %s", str(e))
        return JSONResponse({"error": "Stored data could not be loaded."}, status_code=500)

    if not session.import_bundle(bundle):
        return JSONResponse({"error": "Import failed."}, status_code=500)

    return JSONResponse({
        "success": True,
        "explicit_days": len(bundle.daily_diet_logs),
        "foods": len(session.catalog),
    })


# ==================== Create ASGI App ====================


def create_app() -> Starlette:
    """Create the Starlette application with MCP at root.

    The MCP streamable_http_app() handles /mcp/ internally when mounted at root.
    We use its lifespan context to ensure proper initialization.
    """
    mcp_app = mcp.streamable_http_app()

    routes = [
        Route("/health", health_check, methods=["GET"]),
        Route("/export", export_data, methods=["GET"]),
        Route("/import", import_data, methods=["POST"]),
        # Mount MCP app at root - it handles /mcp/ path internally
        Mount("/", app=mcp_app),
    ]

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["*"],
            ),
        ],
        lifespan=mcp_app.router.lifespan_context,
    )

    return app


app = create_app()


def main() -> None:
    """Run the server."""
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "127.0.0.1")

    logger.info("Starting Meal Plan MCP server on %s:%d", host, port)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
