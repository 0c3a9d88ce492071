"""
Filesystem primitives for the fe-mcp server.

Plain blocking calls; the server runs them off the event loop. Errors are
raised as OSError (or UnicodeDecodeError) and wrapped by the caller.
"""

from __future__ import annotations

import os
from pathlib import Path

from fe_mcp.tools.types import DirectoryItem


def read_file(path: str | Path, encoding: str = "utf-8") -> str:
    """
    Read a whole text file.

    Line endings are returned as stored on disk.

    Raises:
        OSError: If the file is missing, unreadable, or a directory
        UnicodeDecodeError: If the bytes are not valid in `encoding`
    """
    with open(path, encoding=encoding, newline="") as f:
        return f.read()


def write_file(path: str | Path, content: str, encoding: str = "utf-8") -> int:
    """
    Write text to a file, creating or truncating it.

    Parent directories are not created.

    Returns:
        Number of characters written
    """
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(content)
    return len(content)


def list_dir(path: str | Path) -> list[DirectoryItem]:
    """
    List the immediate children of a directory, sorted by name.

    Symlinks are reported as files; only real directories are "directory".
    Each item's path is the parent path as given joined with the child name.

    Raises:
        OSError: If the path is missing or not a directory
    """
    parent = str(path)
    items: list[DirectoryItem] = []
    with os.scandir(parent) as it:
        for entry in it:
            entry_type = "directory" if entry.is_dir(follow_symlinks=False) else "file"
            items.append(
                DirectoryItem(
                    name=entry.name,
                    type=entry_type,
                    path=os.path.join(parent, entry.name),
                )
            )
    items.sort(key=lambda item: item.name)
    return items
