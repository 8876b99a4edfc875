"""
Merchant Cart Service

Hosts the cart reconciliation engine behind a small HTTP API:
create cart, add/update/remove items, reselect options, get cart.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cartcore import CartReconciler, CatalogCache
from cartcore.models import StoreContext

from .config import Settings, get_settings
from .database import CartDatabase, InventoryDatabase, ProductDatabase, ShippingRegionDatabase
from .routes import cart_router, shipping_router
from .services import CartService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    catalog: Optional[ProductDatabase] = None,
    inventory: Optional[InventoryDatabase] = None,
    shipping_regions: Optional[ShippingRegionDatabase] = None,
    carts: Optional[CartDatabase] = None,
) -> FastAPI:
    """
    Build the application and wire its collaborators.

    Every store is constructed here and attached to app.state; nothing
    is shared through module globals.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    catalog = catalog or ProductDatabase()
    inventory = inventory or InventoryDatabase()
    carts = carts or CartDatabase()
    if shipping_regions is None:
        if settings.shipping_regions_path:
            shipping_regions = ShippingRegionDatabase.from_file(
                settings.shipping_regions_path, settings.store_code
            )
        else:
            shipping_regions = ShippingRegionDatabase()

    catalog_cache = CatalogCache(catalog, ttl_seconds=settings.catalog_cache_ttl_seconds)
    reconciler = CartReconciler(catalog_cache, inventory, shipping_regions)
    context = StoreContext(
        store_code=settings.store_code,
        region=settings.default_region,
        currency=settings.currency,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info(f"{settings.app_name} starting up...")
        logger.info(f"Store: {settings.store_code}, region: {settings.default_region}")
        yield
        logger.info(f"{settings.app_name} shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Shopping cart pricing and availability reconciliation",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.catalog = catalog_cache
    app.state.shipping_regions = shipping_regions
    app.state.cart_service = CartService(carts, reconciler, context)

    app.include_router(cart_router)
    app.include_router(shipping_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "merchant-cart"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
