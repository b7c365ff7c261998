"""CloudMCP: cloud resource operations as a CLI and as MCP tools."""

__version__ = "0.1.0"

CLI_NAME = "cloudmcp"
