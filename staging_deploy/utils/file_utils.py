"""File operation utilities"""

import json
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional


def copy_file(src: Path, dst: Path, chunk_size: int = 1024 * 1024) -> None:
    """
    Copy file contents and stat info

    Args:
        src: Source file
        dst: Destination file (overwritten if present)
        chunk_size: Copy chunk size
    """
    dst.parent.mkdir(parents=True, exist_ok=True)

    with open(src, 'rb') as fsrc:
        with open(dst, 'wb') as fdst:
            while chunk := fsrc.read(chunk_size):
                fdst.write(chunk)

    shutil.copystat(src, dst)


def list_relative_files(directory: Path, exclude: Optional[List[str]] = None) -> List[str]:
    """
    List files under a directory as sorted POSIX relative paths

    Args:
        directory: Directory to scan
        exclude: File names to leave out

    Returns:
        Relative paths
    """
    exclude = exclude or []
    if not directory.is_dir():
        return []

    return sorted(
        path.relative_to(directory).as_posix()
        for path in directory.rglob("*")
        if path.is_file() and path.name not in exclude
    )


def read_json(path: Path, default: Any = None) -> Any:
    """Read a JSON file, returning ``default`` when it does not exist"""
    if not path.exists():
        return default
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json(path: Path, data: Dict[str, Any]) -> None:
    """Write a JSON file atomically"""
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(path.name + ".tmp")
    with open(temp_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, sort_keys=True)
    temp_path.replace(path)


def format_size(size: int) -> str:
    """
    Format file size in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} PB"
