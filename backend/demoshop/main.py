import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from demoshop.api.routes import orders, products
from demoshop.core.config import settings
from demoshop.core.database import close_mongo_connection, connect_to_mongo

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    logger.info(f"{settings.PROJECT_NAME} API ready under '{settings.API_PREFIX}'")
    yield
    await close_mongo_connection()


def create_app() -> FastAPI:
    """Build the API application: catalog and order routers plus a health check."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Product catalog and order intake for the Demo Shop storefront",
        version="1.0.0",
        lifespan=lifespan
    )

    # The storefront runs on a different origin during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )

    app.include_router(products.router, prefix=f"{settings.API_PREFIX}/products", tags=["Products"])
    app.include_router(orders.router, prefix=f"{settings.API_PREFIX}/orders", tags=["Orders"])
    app.add_api_route("/health", health_check, methods=["GET"])
    return app


async def health_check():
    return {"status": "healthy", "service": "demoshop-api"}


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    uvicorn.run(app, host="0.0.0.0", port=5000)
