"""
MCP Python Template - Server
============================
Builds the FastMCP server (with auto-discovery of tools/resources/prompts)
and runs it over stdio or as a Starlette application.
"""

import os
import sys
import signal
import logging
import importlib
import pkgutil
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Mount, Route
import uvicorn

from config import get_config
from mcp_app import mcp

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

REGISTRY_PACKAGES = ("tools", "resources", "prompts")

_registry_loaded = False


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr: stdout carries the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def auto_discover_enabled() -> bool:
    return os.getenv("AUTO_DISCOVER", "true").lower() in ("1", "true", "yes", "on")


# ========================================
# MODULE LOADING HELPERS
# ========================================
def import_submodules(pkg_name: str) -> list:
    """Auto-import all submodules in a package (tools/resources/prompts)."""
    loaded = []
    try:
        pkg = importlib.import_module(pkg_name)
        for _, modname, ispkg in pkgutil.iter_modules(pkg.__path__):
            if not ispkg and not modname.startswith('_'):
                full_name = f"{pkg_name}.{modname}"
                importlib.import_module(full_name)
                loaded.append(full_name)
                logger.info(f"✅ Loaded: {full_name}")
    except Exception as e:
        logger.error(f"❌ Failed to load {pkg_name}: {e}")
        raise
    return loaded


def safe_import(name: str):
    """Static import (fallback when AUTO_DISCOVER disabled)."""
    try:
        module = importlib.import_module(name)
        logger.info(f"✅ Imported: {name}")
        return module
    except Exception as e:
        logger.exception(f"❌ Failed to import: {name}: {e}")
        raise


def load_registry(auto_discover: bool = None) -> None:
    """Register every tool/resource/prompt on the shared FastMCP instance (once)."""
    global _registry_loaded
    if _registry_loaded:
        return

    if auto_discover is None:
        auto_discover = auto_discover_enabled()

    if auto_discover:
        logger.info("🔍 Auto-discovery enabled - loading all tools/resources/prompts...")
        for pkg in REGISTRY_PACKAGES:
            import_submodules(pkg)
    else:
        logger.info("📦 Using static imports...")
        for name in ("tools.hello_tool", "resources.hello_resource", "prompts.hello_prompt"):
            safe_import(name)

    _registry_loaded = True


def create_server():
    """
    Server factory: returns the FastMCP server with the registry loaded.

    Used by main() and by the stdio test wrapper.
    """
    load_registry()
    return mcp


# ========================================
# HTTP ENDPOINTS
# ========================================
async def health_check(request):
    """Health check endpoint"""
    return PlainTextResponse("OK")


def create_app(config=None) -> Starlette:
    """Build the Starlette app serving MCP over HTTP at /mcp."""
    config = config or get_config()
    server = create_server()
    mcp_http_app = server.http_app()

    async def version_info(request):
        """Version information endpoint"""
        return JSONResponse({
            "name": config.get('mcp.name', 'mcp-python-template'),
            "version": config.get('server.version', '1.0.0'),
            "status": "running",
        })

    @asynccontextmanager
    async def lifespan(app):
        # The FastMCP session manager only runs inside its own lifespan
        async with mcp_http_app.lifespan(app):
            logger.info("📡 MCP Server: Ready")
            yield
        logger.info("🛑 MCP Server: Stopped")

    app = Starlette(
        routes=[
            Route("/healthz", health_check, methods=["GET"]),
            Route("/health", health_check, methods=["GET"]),
            Route("/version", version_info, methods=["GET"]),
            Mount("/", app=mcp_http_app),
        ],
        lifespan=lifespan,
    )

    if config.is_authentication_enabled():
        from auth_middleware import AuthMiddleware
        app.add_middleware(AuthMiddleware, config=config)
        logger.info("Authentication middleware enabled")

    from utils.request_logging import RequestLoggingMiddleware
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


# ========================================
# GRACEFUL SHUTDOWN
# ========================================
def _graceful_shutdown(*_):
    logger.info("🛑 Received shutdown signal, stopping gracefully...")
    sys.exit(0)


# ========================================
# MAIN
# ========================================
def main():
    config = get_config()
    configure_logging(config.get('logging.level', 'INFO'))

    # Fail fast if misconfigured
    from utils.config_validator import validate_config
    validate_config(config)

    for sig in (signal.SIGINT, signal.SIGTERM):
        signal.signal(sig, _graceful_shutdown)

    transport = str(config.get('server.transport', 'stdio')).lower()

    logger.info("=" * 80)
    logger.info("🚀 MCP Python Template - Starting Up")
    logger.info("=" * 80)
    logger.info(f"📦 Version: {config.get('server.version', '1.0.0')}")
    logger.info(f"🔌 Transport: {transport}")

    server = create_server()

    if transport == "http":
        host = config.get('server.host', '0.0.0.0')
        port = int(config.get('server.port', 8000))
        auth_icon = "✅" if config.is_authentication_enabled() else "❌"
        logger.info(f"🌐 Listening on {host}:{port}")
        logger.info(f"🔐 Authentication: {auth_icon}")
        uvicorn.run(
            create_app(config),
            host=host,
            port=port,
            log_level=str(config.get('logging.level', 'INFO')).lower(),
        )
    else:
        server.run(transport="stdio")


if __name__ == "__main__":
    main()
