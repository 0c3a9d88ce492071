from pathlib import Path

import pytest

from fe_mcp.config import McpConfig
from fe_mcp.server import FeMcpServer


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with no fe-mcp env overrides.
    """
    monkeypatch.chdir(tmp_path)
    for name in (
        "FE_MCP_CONFIG",
        "FE_MCP_ENABLED",
        "FE_MCP_LOG_LEVEL",
        "FE_MCP_OBS_ENABLED",
        "FE_MCP_OBS_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def config() -> McpConfig:
    return McpConfig()


@pytest.fixture
def server(config: McpConfig) -> FeMcpServer:
    return FeMcpServer(config)
