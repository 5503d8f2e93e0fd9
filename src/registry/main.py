import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from src.registry.api.v1 import animals, owners
from src.registry.api.validation import request_validation_handler
from src.registry.config import get_settings
from src.registry.containers import Container
from src.registry.logging import configure_logging
from src.seed.loader import seed_services
from src.seed.schema import get_default_data_path, load_data_set

# Configure logging at module load time
configure_logging(get_settings().logging.level)

logger = logging.getLogger(__name__)


async def seed_if_empty(container: Container) -> None:
    """Load the configured data set when the registry has no owners yet."""
    config = container.config()
    owner_service = container.owner_service()
    if await owner_service.list_owners():
        logger.info("Registry already has data, skipping seed")
        return

    data_path = Path(config.seed.data_file) if config.seed.data_file else get_default_data_path()
    await seed_services(
        load_data_set(data_path),
        owner_service=owner_service,
        animal_service=container.animal_service(),
        ownership_service=container.ownership_service(),
    )


@asynccontextmanager
async def default_lifespan(app: FastAPI):
    """Default application lifespan manager - creates the schema and optionally seeds on startup."""
    container: Container = app.state.container
    config = container.config()
    logger.info("Starting %s...", config.app_name)

    db = container.database()
    await db.create_schema()
    logger.info("Database initialized successfully")

    if config.seed.enabled:
        await seed_if_empty(container)

    yield

    logger.info("Shutting down %s...", config.app_name)
    await db.dispose()


def create_app(container: Container) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: DI container holding configuration, database and services.

    Returns:
        Configured FastAPI application.
    """
    container.wire(modules=[
        "src.registry.api.v1.animals",
        "src.registry.api.v1.owners",
    ])

    config = container.config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        lifespan=default_lifespan,
    )

    # Attach container to app state for access in lifespan and routes
    app.state.container = container

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(animals.router, prefix=config.api_prefix)
    app.include_router(owners.router, prefix=config.api_prefix)

    @app.get("/")
    async def root():
        return {"message": f"Welcome to {config.app_name}"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/api")
    async def api_info():
        return {
            "name": config.app_name,
            "version": config.app_version,
            "api_prefix": config.api_prefix,
            "documentation": {
                "openapi": app.openapi_url,
                "swagger_ui": app.docs_url,
                "redoc": app.redoc_url,
            },
            "resources": {
                "animals": f"{config.api_prefix}/animals",
                "owners": f"{config.api_prefix}/owners",
            },
        }

    return app


container = Container()
app = create_app(container=container)
