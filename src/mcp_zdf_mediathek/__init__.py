"""MCP server exposing the ZDF Mediathek catalog and EPG as paged tools."""

__version__ = "0.1.0"
