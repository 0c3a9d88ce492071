"""
Shared types for fe-mcp tool primitives.

Dataclasses for directory entries and host snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DirectoryItem:
    """One entry of a directory listing."""

    name: str
    type: str  # "file" | "directory"
    path: str

    def to_dict(self) -> dict:
        return {"name": self.name, "type": self.type, "path": self.path}


@dataclass
class CpuInfo:
    """Model name and clock speed (MHz) of one logical CPU."""

    model: str
    speed: int

    def to_dict(self) -> dict:
        return {"model": self.model, "speed": self.speed}


@dataclass
class UserInfo:
    """Account the server process runs as."""

    username: str
    uid: int
    gid: int
    shell: str | None
    homedir: str

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "uid": self.uid,
            "gid": self.gid,
            "shell": self.shell,
            "homedir": self.homedir,
        }


@dataclass
class SystemStatus:
    """Short live snapshot served as the status://system resource."""

    hostname: str
    platform: str
    arch: str
    uptime: float
    loadavg: list[float]
    totalmem: int
    freemem: int
    cpus: int
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "hostname": self.hostname,
            "platform": self.platform,
            "arch": self.arch,
            "uptime": self.uptime,
            "loadavg": self.loadavg,
            "totalmem": self.totalmem,
            "freemem": self.freemem,
            "cpus": self.cpus,
            "timestamp": self.timestamp,
        }


@dataclass
class SystemInfo:
    """Full host snapshot returned by the system_info tool."""

    hostname: str
    platform: str
    arch: str
    release: str
    uptime: float
    loadavg: list[float]
    totalmem: int
    freemem: int
    cpus: list[CpuInfo] = field(default_factory=list)
    network_interfaces: list[str] = field(default_factory=list)
    user_info: UserInfo | None = None
    homedir: str = ""
    tmpdir: str = ""
    timestamp: str = ""

    def to_dict(self) -> dict:
        return {
            "hostname": self.hostname,
            "platform": self.platform,
            "arch": self.arch,
            "release": self.release,
            "uptime": self.uptime,
            "loadavg": self.loadavg,
            "totalmem": self.totalmem,
            "freemem": self.freemem,
            "cpus": [c.to_dict() for c in self.cpus],
            "networkInterfaces": self.network_interfaces,
            "userInfo": self.user_info.to_dict() if self.user_info else None,
            "homedir": self.homedir,
            "tmpdir": self.tmpdir,
            "timestamp": self.timestamp,
        }
