"""Tests for tool and resource dispatch in FeMcpServer."""

import json
import os

import pytest

from fe_mcp.config import McpConfig
from fe_mcp.errors import InternalError, InvalidRequestError, MethodNotFoundError
from fe_mcp.server import FeMcpServer
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND


@pytest.mark.asyncio
async def test_list_tools_names_and_required_fields(server):
    tools = await server.list_tools()
    by_name = {t.name: t for t in tools}

    assert [t.name for t in tools] == ["file_read", "file_write", "list_directory", "system_info"]
    assert by_name["file_read"].inputSchema["required"] == ["path"]
    assert by_name["file_write"].inputSchema["required"] == ["path", "content"]
    assert by_name["list_directory"].inputSchema["required"] == ["path"]
    assert by_name["system_info"].inputSchema["required"] == []


def test_every_tool_has_a_handler(server):
    assert {t.name for t in server.tools} == set(server.tool_handlers)


@pytest.mark.asyncio
async def test_unknown_tool_is_method_not_found(server):
    with pytest.raises(MethodNotFoundError) as exc_info:
        await server.call_tool("nonexistent", {})

    assert exc_info.value.error.code == METHOD_NOT_FOUND
    assert "nonexistent" in exc_info.value.error.message
    assert exc_info.value.error.message == "Unknown tool: nonexistent"


@pytest.mark.asyncio
async def test_empty_path_fails_validation_before_fs_access(server, monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("file system touched")

    monkeypatch.setattr("fe_mcp.server.read_file", _fail)

    with pytest.raises(InternalError) as exc_info:
        await server.call_tool("file_read", {"path": ""})

    message = exc_info.value.error.message
    assert exc_info.value.error.code == INTERNAL_ERROR
    assert message.startswith("Error executing tool file_read:")
    assert "path" in message


@pytest.mark.asyncio
async def test_wrong_type_and_missing_field_name_the_field(server, tmp_path):
    with pytest.raises(InternalError, match="path"):
        await server.call_tool("list_directory", {"path": 123})

    with pytest.raises(InternalError, match="content"):
        await server.call_tool("file_write", {"path": str(tmp_path / "x.txt")})

    with pytest.raises(InternalError, match="path"):
        await server.call_tool("file_read", None)


@pytest.mark.asyncio
async def test_write_then_read_round_trip(server, tmp_path):
    target = str(tmp_path / "hello.txt")

    await server.call_tool("file_write", {"path": target, "content": "hello"})
    result = await server.call_tool("file_read", {"path": target})

    assert len(result) == 1
    assert result[0].type == "text"
    assert result[0].text == "hello"


@pytest.mark.asyncio
async def test_write_reports_character_count(server, tmp_path):
    target = str(tmp_path / "abc.txt")

    result = await server.call_tool("file_write", {"path": target, "content": "abc"})

    assert result[0].text == f"Successfully wrote 3 characters to {target}"


@pytest.mark.asyncio
async def test_write_empty_content(server, tmp_path):
    target = tmp_path / "empty.txt"

    result = await server.call_tool("file_write", {"path": str(target), "content": ""})

    assert result[0].text == f"Successfully wrote 0 characters to {target}"
    assert target.read_text() == ""


@pytest.mark.asyncio
async def test_write_counts_characters_not_bytes(server, tmp_path):
    target = tmp_path / "utf8.txt"

    result = await server.call_tool("file_write", {"path": str(target), "content": "héllo"})

    assert "wrote 5 characters" in result[0].text
    assert target.read_bytes() == "héllo".encode()


@pytest.mark.asyncio
async def test_list_directory_entries(server, tmp_path):
    (tmp_path / "f").write_text("x")
    (tmp_path / "g").mkdir()
    d = str(tmp_path)

    result = await server.call_tool("list_directory", {"path": d})
    entries = json.loads(result[0].text)

    assert sorted(entries, key=lambda e: e["name"]) == [
        {"name": "f", "type": "file", "path": os.path.join(d, "f")},
        {"name": "g", "type": "directory", "path": os.path.join(d, "g")},
    ]


@pytest.mark.asyncio
async def test_read_missing_file_wraps_os_error(server, tmp_path):
    missing = str(tmp_path / "nope.txt")

    with pytest.raises(InternalError) as exc_info:
        await server.call_tool("file_read", {"path": missing})

    message = exc_info.value.error.message
    assert "read" in message
    assert message.startswith("Failed to read file:")
    assert "No such file or directory" in message


@pytest.mark.asyncio
async def test_write_into_missing_directory_fails(server, tmp_path):
    target = str(tmp_path / "missing" / "out.txt")

    with pytest.raises(InternalError, match="^Failed to write file:"):
        await server.call_tool("file_write", {"path": target, "content": "x"})


@pytest.mark.asyncio
async def test_list_missing_directory_fails(server, tmp_path):
    with pytest.raises(InternalError, match="^Failed to list directory:"):
        await server.call_tool("list_directory", {"path": str(tmp_path / "none")})


# os raises ValueError, not OSError, for a path with an embedded NUL byte.
@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("tool", "arguments", "prefix"),
    [
        ("file_read", {"path": "a\x00b"}, "Failed to read file:"),
        ("file_write", {"path": "a\x00b", "content": "x"}, "Failed to write file:"),
        ("list_directory", {"path": "a\x00b"}, "Failed to list directory:"),
    ],
)
async def test_nul_byte_path_uses_operation_message(server, tool, arguments, prefix):
    with pytest.raises(InternalError) as exc_info:
        await server.call_tool(tool, arguments)

    message = exc_info.value.error.message
    assert message.startswith(prefix)
    assert "Error executing tool" not in message


@pytest.mark.asyncio
async def test_protocol_error_from_handler_is_not_rewrapped(server):
    original = InvalidRequestError("already typed")

    async def _raise(args):
        raise original

    server.tool_handlers["file_read"] = _raise

    with pytest.raises(McpError) as exc_info:
        await server.call_tool("file_read", {"path": "x"})

    assert exc_info.value is original
    assert exc_info.value.error.code == INVALID_REQUEST
    assert exc_info.value.error.message == "already typed"


@pytest.mark.asyncio
async def test_unexpected_exception_is_wrapped(server):
    async def _raise(args):
        raise RuntimeError("boom")

    server.tool_handlers["system_info"] = _raise

    with pytest.raises(InternalError) as exc_info:
        await server.call_tool("system_info", {})

    assert exc_info.value.error.message == "Error executing tool system_info: boom"


@pytest.mark.asyncio
async def test_failure_does_not_affect_next_request(server, tmp_path):
    with pytest.raises(MethodNotFoundError):
        await server.call_tool("nonexistent", {})

    target = str(tmp_path / "after.txt")
    result = await server.call_tool("file_write", {"path": target, "content": "ok"})
    assert result[0].text.startswith("Successfully wrote 2 characters")


@pytest.mark.asyncio
async def test_system_info_tool(server):
    result = await server.call_tool("system_info", {})
    info = json.loads(result[0].text)

    for key in (
        "hostname",
        "platform",
        "arch",
        "release",
        "uptime",
        "loadavg",
        "totalmem",
        "freemem",
        "cpus",
        "networkInterfaces",
        "userInfo",
        "homedir",
        "tmpdir",
        "timestamp",
    ):
        assert key in info
    assert isinstance(info["cpus"], list)
    assert all(set(cpu) == {"model", "speed"} for cpu in info["cpus"])


@pytest.mark.asyncio
async def test_list_resources(server):
    resources = await server.list_resources()

    assert [str(r.uri) for r in resources] == ["config://server", "status://system"]
    assert all(r.mimeType == "application/json" for r in resources)


@pytest.mark.asyncio
async def test_read_config_resource(server):
    resource = await server.read_resource("config://server")
    data = json.loads(resource.text)

    assert resource.mime_type == "application/json"
    assert data == {
        "name": "fe-mcp",
        "version": "1.0.0",
        "description": "A basic MCP server with file operations and system information",
        "author": "MCP Developer",
        "license": "MIT",
    }


@pytest.mark.asyncio
async def test_read_status_resource(server):
    resource = await server.read_resource("status://system")
    data = json.loads(resource.text)

    for key in (
        "hostname",
        "platform",
        "arch",
        "uptime",
        "loadavg",
        "totalmem",
        "freemem",
        "cpus",
        "timestamp",
    ):
        assert key in data
    assert isinstance(data["cpus"], int)
    assert data["cpus"] >= 0


@pytest.mark.asyncio
async def test_unknown_resource_is_invalid_request(server):
    with pytest.raises(InvalidRequestError) as exc_info:
        await server.read_resource("unknown://x")

    assert exc_info.value.error.code == INVALID_REQUEST
    assert "unknown://x" in exc_info.value.error.message


@pytest.mark.asyncio
async def test_metrics_recorded_when_enabled(tmp_path):
    config = McpConfig()
    config.observability.enabled = True
    server = FeMcpServer(config)

    await server.call_tool("file_write", {"path": str(tmp_path / "m.txt"), "content": "m"})
    with pytest.raises(MethodNotFoundError):
        await server.call_tool("nope", {})

    stats = server.obs.get_stats()
    assert stats["total_requests"] == 2
    assert stats["total_errors"] == 1
    assert stats["tools"]["file_write"]["calls"] == 1
    assert stats["tools"]["<unknown>"]["errors"] == 1
    assert "nope" not in stats["tools"]


@pytest.mark.asyncio
async def test_unknown_tool_names_share_one_metrics_bucket():
    config = McpConfig()
    config.observability.enabled = True
    server = FeMcpServer(config)

    for i in range(50):
        with pytest.raises(MethodNotFoundError):
            await server.call_tool(f"bogus_{i}", {})

    tools = server.obs.get_stats()["tools"]
    assert list(tools) == ["<unknown>"]
    assert tools["<unknown>"]["calls"] == 50


def test_server_name_and_version_from_config():
    config = McpConfig()
    config.server.name = "custom"
    config.server.version = "9.9.9"

    server = FeMcpServer(config)

    options = server.server.create_initialization_options()
    assert options.server_name == "custom"
    assert options.server_version == "9.9.9"
