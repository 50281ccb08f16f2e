"""Safe resolution of user-supplied file names under the persistent data dirs.

Every HTTP route that touches disk goes through ``safe_file_name`` and then
``resolve_under_root`` before opening anything.
"""

import os
import re
from pathlib import Path

# Characters kept in product directory names: ASCII word chars, space, dash,
# and Japanese kana/kanji
_PRODUCT_NAME_UNSAFE = re.compile(r"[^A-Za-z0-9_ \-\u3040-\u30FF\u4E00-\u9FFF]")


class PathTraversalError(ValueError):
    """Raised when a path traversal attack is detected."""


def safe_file_name(name: str) -> str:
    """Reject names that could address anything but a direct child file."""
    if (
        not name
        or name in (".", "..")
        or "/" in name
        or "\\" in name
        or "\x00" in name
        or ".." in name
    ):
        raise PathTraversalError(f"Invalid file name: {name!r}")
    return name


def resolve_under_root(
    path: str,
    *,
    root: str | Path,
    check_exists: bool = False,
    must_be_file: bool = False,
) -> Path:
    """Resolve ``path`` under ``root``, following symlinks.

    Raises:
        PathTraversalError: the resolved path escapes ``root``
        FileNotFoundError: ``check_exists`` is set and nothing is there
        ValueError: ``must_be_file`` is set and the target is not a file
    """
    root_real = os.path.realpath(root)
    full_path = os.path.normpath(os.path.join(root_real, path.lstrip("/")))
    resolved = os.path.realpath(full_path)

    if resolved != root_real and not resolved.startswith(root_real + os.sep):
        raise PathTraversalError(f"Path '{path}' resolves outside {root}")

    if check_exists and not os.path.exists(resolved):
        raise FileNotFoundError(f"Path does not exist: {path}")

    if must_be_file and not os.path.isfile(resolved):
        raise ValueError(f"Path is not a file: {path}")

    return Path(resolved)


def sanitize_product_name(name: str) -> str:
    cleaned = _PRODUCT_NAME_UNSAFE.sub("_", name).strip()
    if not cleaned or set(cleaned) == {"_"}:
        raise PathTraversalError(f"Invalid product name: {name!r}")
    return cleaned
