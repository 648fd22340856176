"""
Color Format MCP Server - FastAPI implementation
Provides endpoints for color conversion, search-param parsing and image export
"""

import logging
from typing import Optional

from fastapi import FastAPI
import uvicorn
from fastapi_mcp import FastApiMCP

from config import ServerSettings, load_settings
from routers import colorTools_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    """Build the application with its settings attached to app.state."""
    app = FastAPI(
        title="Color Format MCP Server",
        description="A FastAPI server for color conversion and color image export",
        version="1.0.0"
    )
    app.state.settings = settings if settings is not None else load_settings()

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    app.include_router(colorTools_router)
    return app


app = create_app()

if __name__ == "__main__":
    settings = app.state.settings
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if settings.enable_mcp:
        mcp = FastApiMCP(app, exclude_operations=[])
        mcp.mount_http()
        logger.info("MCP tools mounted")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
