#!/usr/bin/env python3
"""
fe-mcp Server - Model Context Protocol server with file operations and
system information.

Supports stdio transport.
Run with: python -m fe_mcp.server

Tools:
- file_read: Read a UTF-8 text file
- file_write: Write (overwrite) a UTF-8 text file
- list_directory: List entries of a directory
- system_info: Full host snapshot

Resources:
- config://server: Server identity
- status://system: Live host status
"""  # noqa: I001

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import json
import logging
import sys
import time
from typing import Any

from fe_mcp.config import McpConfig, load_config
from fe_mcp.errors import InternalError, InvalidRequestError, MethodNotFoundError
from fe_mcp.observability import TEXT_LOG_FORMAT, ObservabilityContext, setup_logging
from fe_mcp.schemas import (
    ArgsValidationError,
    FileReadArgs,
    FileWriteArgs,
    ListDirectoryArgs,
    validate_args,
)
from fe_mcp.tools.fs import list_dir, read_file, write_file
from fe_mcp.tools.sysinfo import system_info, system_status
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from mcp.types import (
    CallToolRequest,
    CallToolResult,
    Resource,
    ServerResult,
    TextContent,
    Tool,
)
from pydantic import AnyUrl

# Configure logging to stderr (stdout carries the protocol)
logging.basicConfig(
    level=logging.INFO,
    format=TEXT_LOG_FORMAT,
    stream=sys.stderr,
)
logger = logging.getLogger("fe-mcp")

CONFIG_URI = "config://server"
STATUS_URI = "status://system"
JSON_MIME = "application/json"
UNKNOWN_TOOL = "<unknown>"

ToolHandler = Callable[[Any], Awaitable[list[TextContent]]]

TOOLS: list[Tool] = [
    Tool(
        name="file_read",
        description="Read the contents of a file",
        inputSchema={
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Path to the file to read",
                },
            },
            "required": ["path"],
        },
    ),
    Tool(
        name="file_write",
        description="Write content to a file",
        inputSchema={
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Path to the file to write",
                },
                "content": {
                    "type": "string",
                    "description": "Content to write to the file",
                },
            },
            "required": ["path", "content"],
        },
    ),
    Tool(
        name="list_directory",
        description="List the contents of a directory",
        inputSchema={
            "type": "object",
            "properties": {
                "path": {
                    "type": "string",
                    "minLength": 1,
                    "description": "Path to the directory to list",
                },
            },
            "required": ["path"],
        },
    ),
    Tool(
        name="system_info",
        description="Get system information",
        inputSchema={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),
]

RESOURCES: list[Resource] = [
    Resource(
        uri=AnyUrl(CONFIG_URI),
        name="Server Configuration",
        description="Current server configuration and metadata",
        mimeType=JSON_MIME,
    ),
    Resource(
        uri=AnyUrl(STATUS_URI),
        name="System Status",
        description="Current system status and information",
        mimeType=JSON_MIME,
    ),
]


@dataclass(frozen=True)
class ResourceText:
    """Text body of a resource read."""

    uri: str
    mime_type: str
    text: str


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


class FeMcpServer:
    """fe-mcp server: routes tool and resource requests to handlers."""

    def __init__(self, config: McpConfig):
        self.config = config
        self.server = Server(config.server.name, version=config.server.version)
        self.obs = ObservabilityContext(config.observability)

        self.tools = list(TOOLS)
        self.resources = list(RESOURCES)
        self.tool_handlers: dict[str, ToolHandler] = {
            "file_read": self._handle_file_read,
            "file_write": self._handle_file_write,
            "list_directory": self._handle_list_directory,
            "system_info": self._handle_system_info,
        }

        self._register_handlers()
        logger.info(
            f"fe-mcp server initialized ({config.server.name} v{config.server.version}, "
            f"{len(self.tools)} tools, {len(self.resources)} resources)"
        )

    # Dispatch

    async def list_tools(self) -> list[Tool]:
        logger.debug("list_tools called")
        return self.tools

    async def call_tool(self, name: str, arguments: Any) -> list[TextContent]:
        """
        Invoke a tool by name.

        Protocol errors raised inside propagate unchanged; any other failure
        (argument validation included) is wrapped as InternalError.

        Raises:
            MethodNotFoundError: Unknown tool name
            InternalError: Validation or execution failure
        """
        cid = self.obs.correlation_id()
        start_time = time.time()
        success = False
        error_msg = None

        logger.info(f"call_tool: {name}", extra={"correlation_id": cid, "tool": name})

        try:
            handler = self.tool_handlers.get(name)
            if handler is None:
                raise MethodNotFoundError(f"Unknown tool: {name}")
            result = await handler(arguments)
            success = True
            return result
        except McpError as e:
            error_msg = e.error.message
            raise
        except ArgsValidationError as e:
            error_msg = f"Error executing tool {name}: {e}"
            raise InternalError(error_msg) from e
        except Exception as e:
            error_msg = f"Error executing tool {name}: {e}"
            logger.exception(
                f"Tool {name} failed: {e}", extra={"correlation_id": cid, "tool": name}
            )
            raise InternalError(error_msg) from e
        finally:
            latency_ms = (time.time() - start_time) * 1000
            # Unknown names share one bucket so callers cannot grow the map.
            metric_name = name if name in self.tool_handlers else UNKNOWN_TOOL
            self.obs.record(cid, metric_name, latency_ms=latency_ms, success=success)
            logger.info(
                f"call_tool done: {name}",
                extra={
                    "correlation_id": cid,
                    "tool": name,
                    "latency_ms": round(latency_ms, 2),
                    "status": "ok" if success else "error",
                    "error": error_msg,
                },
            )

    async def list_resources(self) -> list[Resource]:
        logger.debug("list_resources called")
        return self.resources

    async def read_resource(self, uri: str) -> ResourceText:
        """
        Read a resource by exact URI.

        Raises:
            InvalidRequestError: Unknown resource URI
        """
        logger.debug(f"read_resource: {uri}")

        if uri == CONFIG_URI:
            text = json.dumps(self.config.server.identity(), indent=2)
        elif uri == STATUS_URI:
            snapshot = await asyncio.to_thread(system_status)
            text = json.dumps(snapshot.to_dict(), indent=2)
        else:
            raise InvalidRequestError(f"Unknown resource: {uri}")

        return ResourceText(uri=uri, mime_type=JSON_MIME, text=text)

    # Tool handlers

    async def _handle_file_read(self, args: Any) -> list[TextContent]:
        params = validate_args(FileReadArgs, args)
        try:
            content = await asyncio.to_thread(read_file, params.path)
        except (OSError, UnicodeError, ValueError) as e:
            raise InternalError(f"Failed to read file: {e}") from e
        return _text(content)

    async def _handle_file_write(self, args: Any) -> list[TextContent]:
        params = validate_args(FileWriteArgs, args)
        try:
            written = await asyncio.to_thread(write_file, params.path, params.content)
        except (OSError, UnicodeError, ValueError) as e:
            raise InternalError(f"Failed to write file: {e}") from e
        return _text(f"Successfully wrote {written} characters to {params.path}")

    async def _handle_list_directory(self, args: Any) -> list[TextContent]:
        params = validate_args(ListDirectoryArgs, args)
        try:
            items = await asyncio.to_thread(list_dir, params.path)
        except (OSError, ValueError) as e:
            raise InternalError(f"Failed to list directory: {e}") from e
        return _text(json.dumps([item.to_dict() for item in items], indent=2))

    async def _handle_system_info(self, args: Any) -> list[TextContent]:
        info = await asyncio.to_thread(system_info)
        return _text(json.dumps(info.to_dict(), indent=2))

    # SDK wiring

    def _register_handlers(self):
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return await self.list_tools()

        # Raw handler instead of @server.call_tool(): the decorator turns every
        # exception into an isError result, dropping the McpError code. Raised
        # here, McpError reaches the request loop and is sent as ErrorData.
        async def call_tool(req: CallToolRequest) -> ServerResult:
            content = await self.call_tool(req.params.name, req.params.arguments)
            return ServerResult(CallToolResult(content=content))

        self.server.request_handlers[CallToolRequest] = call_tool

        @self.server.list_resources()
        async def list_resources() -> list[Resource]:
            return await self.list_resources()

        @self.server.read_resource()
        async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
            resource = await self.read_resource(str(uri))
            return [ReadResourceContents(content=resource.text, mime_type=resource.mime_type)]

    async def run(self):
        """Run the server with stdio transport."""
        logger.info("Starting fe-mcp server (stdio transport)")
        try:
            async with stdio_server() as (read_stream, write_stream):
                print(
                    f"{self.config.server.name} v{self.config.server.version} started",
                    file=sys.stderr,
                    flush=True,
                )
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            if self.obs.enabled:
                logger.info(f"Session metrics: {json.dumps(self.obs.get_stats())}")


def main():
    """Entry point for fe-mcp server."""
    parser = argparse.ArgumentParser(description="fe-mcp server")
    parser.add_argument(
        "--config",
        "-c",
        help="Path to fe-mcp.toml config file",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Override log level",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ValueError as e:
        parser.error(f"invalid config: {e}")

    if args.log_level:
        config.server.log_level = args.log_level
        config.observability.log_level = args.log_level

    if config.observability.enabled:
        setup_logging(config.observability, "fe-mcp")
    else:
        log_level = getattr(logging, config.server.log_level.upper(), logging.INFO)
        logging.getLogger().setLevel(log_level)
        logger.setLevel(log_level)

    logger.info(f"Config loaded: enabled={config.enabled}, server={config.server.name}")
    logger.info(
        f"Observability: enabled={config.observability.enabled}, "
        f"log_format={config.observability.log_format}"
    )

    if not config.enabled:
        logger.warning("MCP server disabled in config, exiting")
        sys.exit(0)

    server = FeMcpServer(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        print(f"Failed to start server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
