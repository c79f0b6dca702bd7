"""Presentation layers: command-line interface and MCP server."""
