"""Jira MCP Server - Model Context Protocol integration.

This package exposes Jira Cloud REST operations as MCP tools, enabling
AI assistants to read, search and update issues.

Modules:
- server: stdio MCP server implementation
- formatters: Response formatting utilities
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- schemas: Tool argument models
"""

__version__ = "0.1.0"

from . import formatters
from . import schemas
from . import tools
from . import handlers

__all__ = ["formatters", "schemas", "tools", "handlers", "__version__"]
