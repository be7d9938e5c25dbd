"""HTTP server for the storefront."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import StorefrontConfig
from .errors import CatalogFetchError, ProductNotFoundError
from .models import CatalogStatus
from .storefront import Storefront

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("storefront-http-server")

# Global state
storefront: Storefront


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    global storefront

    # Startup
    config = StorefrontConfig.from_env()
    logging.getLogger().setLevel(config.log_level.upper())

    logger.info("Starting Storefront HTTP Server...")
    storefront = Storefront.from_config(config)
    state = await storefront.start()
    if state.status is CatalogStatus.FAILED:
        logger.warning(f"Catalog failed to load at startup: {state.error}")

    yield

    # Shutdown
    logger.info("Shutting down Storefront HTTP Server...")
    await storefront.close()


app = FastAPI(
    title="Storefront MCP Server",
    description="HTTP API for browsing the product catalog and managing a shopping cart",
    version="0.1.0",
    lifespan=lifespan,
)


# Request/Response Models
class ProductRequest(BaseModel):
    product_id: str


class QuantityRequest(BaseModel):
    product_id: str
    quantity: int


def _cart_response() -> dict:
    return storefront.cart.snapshot().model_dump()


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Storefront MCP Server",
        "version": "0.1.0",
        "description": "HTTP API for browsing the product catalog and managing a shopping cart",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "products": {"list": "GET /products", "get": "GET /products/{product_id}"},
            "catalog": {"reload": "POST /catalog/reload"},
            "cart": {
                "get": "GET /cart",
                "add": "POST /cart/add",
                "remove": "POST /cart/remove",
                "quantity": "POST /cart/quantity",
                "clear": "POST /cart/clear",
            },
        },
        "catalog_status": storefront.loader.status.value,
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "catalog_status": storefront.loader.status.value,
        "catalog_error": storefront.loader.error,
    }


# Product endpoints
@app.get("/products")
async def list_products():
    """Get the catalog status and its products."""
    state = storefront.loader.state
    return {
        "status": state.status.value,
        "error": state.error,
        "count": len(state.products),
        "products": [product.model_dump() for product in state.products],
    }


@app.get("/products/{product_id}")
async def get_product(product_id: str):
    """Get a single product."""
    try:
        product = await storefront.find_product(product_id)
        return product.model_dump()
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))


@app.post("/catalog/reload")
async def reload_catalog():
    """Reload the catalog from its provider."""
    state = await storefront.reload()
    return {"status": state.status.value, "error": state.error, "count": len(state.products)}


# Cart endpoints
@app.get("/cart")
async def get_cart():
    """Get current shopping cart with totals."""
    return _cart_response()


@app.post("/cart/add")
async def add_to_cart(request: ProductRequest):
    """Add one unit of a product to the cart."""
    try:
        await storefront.add_by_id(request.product_id)
        return _cart_response()
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CatalogFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Add to cart error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/cart/remove")
async def remove_from_cart(request: ProductRequest):
    """Remove a product from the cart."""
    storefront.remove(request.product_id)
    return _cart_response()


@app.post("/cart/quantity")
async def update_cart_quantity(request: QuantityRequest):
    """Set the quantity of a product in the cart."""
    storefront.set_quantity(request.product_id, request.quantity)
    return _cart_response()


@app.post("/cart/clear")
async def clear_cart():
    """Empty the cart."""
    storefront.clear()
    return _cart_response()


def run_http_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the HTTP server."""
    import uvicorn

    if reload:
        uvicorn.run("storefront_server.http_server:app", host=host, port=port, log_level="info", reload=True)
    else:
        uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    run_http_server()
