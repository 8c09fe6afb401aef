"""Read-only MCP server for the PropStack real estate API."""

__version__ = "0.1.1"
