"""Storefront MCP Server - product catalog and shopping cart."""

__version__ = "0.1.0"
