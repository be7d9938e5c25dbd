"""MCP Server for the storefront catalog and shopping cart."""

import asyncio
import logging
from typing import Any, Optional

from mcp.server import Server
from mcp.types import Resource, Tool, TextContent
from pydantic import AnyUrl

from .config import StorefrontConfig
from .models import CatalogStatus
from .storefront import Storefront
from .views import render_cart, render_product, render_product_list

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("storefront-mcp-server")

# Initialize server
app = Server("storefront-mcp-server")

# Global state
storefront: Storefront
config: Optional[StorefrontConfig] = None


async def ensure_catalog() -> bool:
    """Ensure the catalog is loaded, waiting for a load in progress or retrying a failed one."""
    if storefront.loader.status is CatalogStatus.READY:
        return True

    logger.info("Catalog not ready, loading...")
    state = await storefront.ensure_loaded()
    if state.status is CatalogStatus.READY:
        return True

    logger.warning(f"Catalog still unavailable: {state.error}")
    return False


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


@app.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return [
        Resource(
            uri=AnyUrl("storefront://products"),
            name="Product Catalog",
            mimeType="application/json",
            description="Catalog status and available products",
        ),
        Resource(
            uri=AnyUrl("storefront://cart"),
            name="Shopping Cart",
            mimeType="application/json",
            description="Current shopping cart contents and totals",
        ),
    ]


@app.read_resource()
async def read_resource(uri: AnyUrl) -> str:
    """Read a resource by URI."""
    uri_str = str(uri)

    if uri_str == "storefront://products":
        return storefront.loader.state.model_dump_json(indent=2)

    elif uri_str == "storefront://cart":
        return storefront.cart.snapshot().model_dump_json(indent=2)

    raise ValueError(f"Unknown resource: {uri}")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="storefront_list_products",
            description="List the products available in the catalog",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="storefront_get_product",
            description="Get a single product by ID",
            inputSchema={
                "type": "object",
                "properties": {
                    "product_id": {
                        "type": "string",
                        "description": "Product ID to look up",
                    },
                },
                "required": ["product_id"],
            },
        ),
        Tool(
            name="storefront_add_to_cart",
            description="Add one unit of a product to the shopping cart",
            inputSchema={
                "type": "object",
                "properties": {
                    "product_id": {
                        "type": "string",
                        "description": "Product ID to add to cart",
                    },
                },
                "required": ["product_id"],
            },
        ),
        Tool(
            name="storefront_remove_from_cart",
            description="Remove a product from the shopping cart",
            inputSchema={
                "type": "object",
                "properties": {
                    "product_id": {
                        "type": "string",
                        "description": "Product ID to remove from cart",
                    },
                },
                "required": ["product_id"],
            },
        ),
        Tool(
            name="storefront_update_cart_quantity",
            description="Set the quantity of a product already in the cart (0 or less removes it)",
            inputSchema={
                "type": "object",
                "properties": {
                    "product_id": {
                        "type": "string",
                        "description": "Product ID to update",
                    },
                    "quantity": {
                        "type": "integer",
                        "description": "New quantity to set",
                    },
                },
                "required": ["product_id", "quantity"],
            },
        ),
        Tool(
            name="storefront_clear_cart",
            description="Remove every item from the shopping cart",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="storefront_get_cart",
            description="Get current shopping cart contents with subtotal, discount, tax and total",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="storefront_reload_catalog",
            description="Reload the product catalog from its source",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: Any) -> list[TextContent]:
    """Handle tool calls."""
    arguments = arguments or {}
    try:
        if name == "storefront_list_products":
            await ensure_catalog()
            return _text(render_product_list(storefront.loader.state))

        elif name == "storefront_get_product":
            product = await storefront.find_product(arguments["product_id"])
            return _text(render_product(product))

        elif name == "storefront_add_to_cart":
            await ensure_catalog()
            item = await storefront.add_by_id(arguments["product_id"])
            return _text(f"Added {item.product.name} to cart (quantity: {item.quantity})")

        elif name == "storefront_remove_from_cart":
            product_id = arguments["product_id"]
            if product_id not in storefront.cart:
                return _text(f"Product {product_id} is not in the cart")

            storefront.remove(product_id)
            return _text(f"Removed product {product_id} from cart")

        elif name == "storefront_update_cart_quantity":
            product_id = arguments["product_id"]
            quantity = int(arguments["quantity"])
            if product_id not in storefront.cart:
                return _text(f"Product {product_id} is not in the cart; add it first")

            storefront.set_quantity(product_id, quantity)
            if quantity <= 0:
                return _text(f"Removed product {product_id} from cart")
            return _text(f"Updated product {product_id} to quantity {quantity}")

        elif name == "storefront_clear_cart":
            storefront.clear()
            return _text("Cart cleared")

        elif name == "storefront_get_cart":
            return _text(render_cart(storefront.cart.snapshot()))

        elif name == "storefront_reload_catalog":
            state = await storefront.reload()
            return _text(render_product_list(state))

        else:
            return _text(f"Unknown tool: {name}")

    except Exception as e:
        logger.error(f"Error executing tool {name}: {e}", exc_info=True)
        return _text(f"Error: {str(e)}")


async def main(server_config: Optional[StorefrontConfig] = None) -> None:
    """Main entry point for the MCP server."""
    global storefront, config

    config = server_config or StorefrontConfig.from_env()
    logging.getLogger().setLevel(config.log_level.upper())

    storefront = Storefront.from_config(config)
    logger.info("Starting Storefront MCP Server...")

    state = await storefront.start()
    if state.status is CatalogStatus.FAILED:
        logger.warning(f"Catalog failed to load at startup: {state.error}")

    # Import and run the server
    from mcp.server.stdio import stdio_server

    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options(),
            )
    finally:
        await storefront.close()


if __name__ == "__main__":
    asyncio.run(main())
