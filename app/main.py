"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers routes (page, form actions, JSON state)
- No business logic should be written here
- Manages application lifecycle (startup load / shutdown)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import httpx
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.services.alert_channel import AlertChannel
from app.services.connectivity import ConnectivityMonitor
from app.services.state_store import StateStore
from app.services.todo_app import TodoApp
from app.services.todo_gateway import TodoGateway, create_http_client
from app.views.renderer import TodoListView
from app.api import pages, state

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


def build_todo_app(client: httpx.AsyncClient, connectivity: ConnectivityMonitor) -> TodoApp:
    """Assembles one controller with its own store, view and alert channel."""
    gateway = TodoGateway(
        client,
        connectivity,
        max_todo_id=settings.TODO_API_MAX_TODO_ID,
        delete_resource=settings.TODO_API_DELETE_RESOURCE
    )
    store = StateStore()
    return TodoApp(gateway, store, TodoListView(store), AlertChannel())


def create_app(transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Creates the FastAPI application.

    Args:
        transport: Optional httpx transport for the todo API client
            (tests pass an httpx.MockTransport)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        Handles startup and shutdown events.
        """
        logger.info("🚀 Starting TodoBoard application...")

        try:
            logger.info("Validating configuration...")
            validate_settings()
            logger.info("✅ Configuration validated")
        except Exception as e:
            logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
            raise

        client = create_http_client(
            settings.TODO_API_BASE_URL,
            timeout=settings.TODO_API_TIMEOUT,
            transport=transport
        )
        connectivity = ConnectivityMonitor(online=not settings.OFFLINE_MODE)
        todo_app = build_todo_app(client, connectivity)

        app.state.connectivity = connectivity
        app.state.todo_app = todo_app

        # Failures end up in the alert, startup itself always succeeds
        await todo_app.load()

        logger.info("🎉 TodoBoard application started")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Todo API: {settings.TODO_API_BASE_URL}")

        yield  # Application runs here

        logger.info("🛑 Shutting down TodoBoard application...")

        try:
            todo_app.view.close()
            await client.aclose()
            logger.info("✅ Todo API client closed")
        except Exception as e:
            logger.error(f"Error during shutdown: {str(e)}", exc_info=True)

    app = FastAPI(
        title="TodoBoard",
        description="Todo list front end for a remote users/todos REST API",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.DEBUG,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time header to all responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > 5.0:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={"process_time": process_time}
            )

        return response

    add_exception_handlers(app)

    app.include_router(pages.router, tags=["Page"])
    app.include_router(state.router, prefix=settings.API_PREFIX, tags=["State"])

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """
        Reports whether the initial load succeeded and the network is up.
        """
        todo_app = request.app.state.todo_app
        connectivity = request.app.state.connectivity

        health_status = {
            "status": "healthy",
            "timestamp": time.time(),
            "environment": settings.ENVIRONMENT,
            "version": "1.0.0",
            "checks": {
                "state": "loaded" if todo_app.store.loaded else "empty",
                "connectivity": "online" if connectivity.is_online() else "offline",
            }
        }

        if not todo_app.store.loaded or not connectivity.is_online():
            health_status["status"] = "degraded"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    @app.get("/live", tags=["Health"])
    async def liveness_check():
        """
        Liveness probe - indicates if app is alive.
        """
        return {"status": "alive"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
