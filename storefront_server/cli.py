"""Command-line interface for Storefront MCP Server."""

import argparse
import asyncio
import os
import sys


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Storefront MCP Server - Browse a product catalog and manage a shopping cart"
    )
    parser.add_argument(
        "--mode",
        choices=["stdio", "http"],
        default="stdio",
        help="Server mode: stdio (for MCP clients) or http (REST API)",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="HTTP server host (only for http mode, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP server port (only for http mode, default: 8000)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable hot reloading (only for http mode)",
    )
    parser.add_argument(
        "--catalog-url",
        help="Catalog backend base URL (default: built-in fixture catalog)",
    )
    parser.add_argument(
        "--discount",
        help="Cart discount percentage, 0-100 (default: 10)",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()

    # Flags override the environment so both server modes see them
    if args.catalog_url:
        os.environ["STOREFRONT_CATALOG_URL"] = args.catalog_url
    if args.discount is not None:
        os.environ["STOREFRONT_DISCOUNT_PERCENT"] = args.discount
    if args.log_level:
        os.environ["STOREFRONT_LOG_LEVEL"] = args.log_level

    try:
        if args.mode == "stdio":
            # Run MCP server via stdio
            from .server import main as server_main

            asyncio.run(server_main())
        elif args.mode == "http":
            # Run HTTP server
            from .http_server import run_http_server

            print(f"Starting Storefront HTTP Server on {args.host}:{args.port}", file=sys.stderr)
            print(f"API documentation available at http://{args.host}:{args.port}/docs", file=sys.stderr)
            run_http_server(host=args.host, port=args.port, reload=args.reload)
    except KeyboardInterrupt:
        print("\nShutting down...", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
