"""fe-mcp - Model Context Protocol server with file operations and system information."""

__version__ = "1.0.0"
