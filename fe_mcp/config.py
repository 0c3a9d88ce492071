"""fe-mcp configuration loader - reads from fe-mcp.toml with ENV overrides."""  # noqa: I001

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class McpServerConfig:
    """Server identity and log level."""

    name: str = "fe-mcp"
    version: str = "1.0.0"
    description: str = "A basic MCP server with file operations and system information"
    author: str = "MCP Developer"
    license: str = "MIT"
    log_level: str = "info"

    def validate(self) -> None:
        if not self.name:
            raise ValueError("server name must not be empty")
        if not self.version:
            raise ValueError("server version must not be empty")
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")

    def identity(self) -> dict[str, str]:
        """Static record served as the config://server resource."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "author": self.author,
            "license": self.license,
        }


@dataclass
class McpObservabilityConfig:
    """Structured logging and per-tool metrics."""

    enabled: bool = False
    log_format: str = "json"  # "json" | "text"
    log_level: str = "info"
    include_correlation_id: bool = True

    def validate(self) -> None:
        if self.log_format not in ("json", "text"):
            raise ValueError(f"Invalid log_format: {self.log_format}")
        if self.log_level.lower() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")


@dataclass
class McpConfig:
    """Root fe-mcp configuration."""

    enabled: bool = True
    server: McpServerConfig = field(default_factory=McpServerConfig)
    observability: McpObservabilityConfig = field(default_factory=McpObservabilityConfig)

    def validate(self) -> None:
        self.server.validate()
        self.observability.validate()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def _apply_env_overrides(cfg: McpConfig) -> McpConfig:
    """Apply environment variable overrides. ENV beats TOML."""
    if os.getenv("FE_MCP_ENABLED"):
        cfg.enabled = _env_flag("FE_MCP_ENABLED")

    if os.getenv("FE_MCP_LOG_LEVEL"):
        cfg.server.log_level = os.getenv("FE_MCP_LOG_LEVEL", cfg.server.log_level)

    if os.getenv("FE_MCP_OBS_ENABLED"):
        cfg.observability.enabled = _env_flag("FE_MCP_OBS_ENABLED")
    if os.getenv("FE_MCP_OBS_LOG_FORMAT"):
        cfg.observability.log_format = os.getenv(
            "FE_MCP_OBS_LOG_FORMAT", cfg.observability.log_format
        )

    return cfg


def load_config(config_path: str | Path | None = None) -> McpConfig:
    """
    Load fe-mcp config from fe-mcp.toml with ENV overrides.

    Precedence: ENV → TOML → defaults

    Args:
        config_path: Path to fe-mcp.toml. If None, searches:
            1. FE_MCP_CONFIG env var
            2. ./fe-mcp.toml

    Returns:
        McpConfig dataclass with merged settings.

    Raises:
        ValueError: If the merged settings are invalid
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    if config_path is None:
        if os.getenv("FE_MCP_CONFIG"):
            config_path = Path(cast(str, os.getenv("FE_MCP_CONFIG")))
        else:
            config_path = Path("fe-mcp.toml")
    else:
        config_path = Path(config_path)

    cfg = McpConfig()

    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        mcp_data = data.get("mcp", {})

        cfg.enabled = mcp_data.get("enabled", cfg.enabled)

        # Server
        srv = mcp_data.get("server", {})
        cfg.server.name = srv.get("name", cfg.server.name)
        cfg.server.version = srv.get("version", cfg.server.version)
        cfg.server.description = srv.get("description", cfg.server.description)
        cfg.server.author = srv.get("author", cfg.server.author)
        cfg.server.license = srv.get("license", cfg.server.license)
        cfg.server.log_level = srv.get("log_level", cfg.server.log_level)

        # Observability
        obs = mcp_data.get("observability", {})
        cfg.observability.enabled = obs.get("enabled", cfg.observability.enabled)
        cfg.observability.log_format = obs.get("log_format", cfg.observability.log_format)
        cfg.observability.log_level = obs.get("log_level", cfg.observability.log_level)
        cfg.observability.include_correlation_id = obs.get(
            "include_correlation_id", cfg.observability.include_correlation_id
        )

    cfg = _apply_env_overrides(cfg)

    cfg.validate()

    return cfg
