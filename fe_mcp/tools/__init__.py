"""fe-mcp tool primitives - filesystem and host information."""

from fe_mcp.tools.fs import list_dir, read_file, write_file  # noqa: F401
from fe_mcp.tools.sysinfo import system_info, system_status  # noqa: F401
from fe_mcp.tools.types import DirectoryItem, SystemInfo, SystemStatus  # noqa: F401
