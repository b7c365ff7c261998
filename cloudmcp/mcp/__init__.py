"""MCP server module for cloudmcp."""

from cloudmcp.mcp.server import CloudMCPServer, build_input_schema, build_tool_tokens

__all__ = ["CloudMCPServer", "build_input_schema", "build_tool_tokens"]
