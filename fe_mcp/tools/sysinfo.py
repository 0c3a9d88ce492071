"""
Host information primitives.

- system_status: short snapshot for the status://system resource
- system_info: full snapshot for the system_info tool
"""

from __future__ import annotations

from datetime import UTC, datetime
import getpass
import logging
import os
from pathlib import Path
import platform
import socket
import sys
import tempfile
import time

import psutil

from fe_mcp.tools.types import CpuInfo, SystemInfo, SystemStatus, UserInfo

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    """UTC ISO-8601 with millisecond precision and Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _uptime() -> float:
    return round(time.time() - psutil.boot_time(), 2)


def _loadavg() -> list[float]:
    return [round(v, 2) for v in psutil.getloadavg()]


def _cpu_models() -> list[str]:
    """Per-processor model names from /proc/cpuinfo (Linux only)."""
    models: list[str] = []
    try:
        with open("/proc/cpuinfo") as f:
            for line in f:
                if line.startswith("model name"):
                    models.append(line.split(":", 1)[1].strip())
    except OSError:
        pass
    return models


def _cpus() -> list[CpuInfo]:
    count = psutil.cpu_count(logical=True) or 0
    models = _cpu_models()
    fallback_model = platform.processor() or platform.machine()

    try:
        freqs = psutil.cpu_freq(percpu=True) or []
    except (NotImplementedError, OSError) as e:
        logger.debug(f"cpu_freq unavailable: {e}")
        freqs = []

    cpus = []
    for i in range(count):
        model = models[i] if i < len(models) else fallback_model
        if i < len(freqs):
            speed = int(freqs[i].current)
        elif freqs:
            speed = int(freqs[0].current)
        else:
            speed = 0
        cpus.append(CpuInfo(model=model, speed=speed))
    return cpus


def _user_info() -> UserInfo:
    homedir = str(Path.home())
    uid = os.getuid() if hasattr(os, "getuid") else -1
    gid = os.getgid() if hasattr(os, "getgid") else -1
    shell = None
    username = None

    if uid >= 0:
        import pwd

        try:
            entry = pwd.getpwuid(uid)
            username = entry.pw_name
            shell = entry.pw_shell
            homedir = entry.pw_dir
        except KeyError:
            pass

    if username is None:
        try:
            username = getpass.getuser()
        except OSError:
            username = str(uid)

    return UserInfo(username=username, uid=uid, gid=gid, shell=shell, homedir=homedir)


def system_status() -> SystemStatus:
    """Get a short live snapshot of the host."""
    vm = psutil.virtual_memory()
    return SystemStatus(
        hostname=socket.gethostname(),
        platform=sys.platform,
        arch=platform.machine(),
        uptime=_uptime(),
        loadavg=_loadavg(),
        totalmem=vm.total,
        freemem=vm.available,
        cpus=psutil.cpu_count(logical=True) or 0,
        timestamp=_timestamp(),
    )


def system_info() -> SystemInfo:
    """Get the full host snapshot: OS, memory, CPUs, interfaces, user, dirs."""
    vm = psutil.virtual_memory()
    return SystemInfo(
        hostname=socket.gethostname(),
        platform=sys.platform,
        arch=platform.machine(),
        release=platform.release(),
        uptime=_uptime(),
        loadavg=_loadavg(),
        totalmem=vm.total,
        freemem=vm.available,
        cpus=_cpus(),
        network_interfaces=list(psutil.net_if_addrs().keys()),
        user_info=_user_info(),
        homedir=str(Path.home()),
        tmpdir=tempfile.gettempdir(),
        timestamp=_timestamp(),
    )
