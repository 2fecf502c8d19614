"""Take Home MCP server package."""
