"""Path canonicalization for asset lookups."""

import os
from pathlib import PurePosixPath


def clean_path(name: str) -> str:
    """Return the shortest equivalent slash-separated path.

    Collapses duplicate separators, drops ``.`` elements and resolves
    ``..`` against the preceding element. ``..`` at the root of a rooted
    path is dropped; in a relative path it is kept. An empty result
    becomes ``"."``.
    """
    raw = str(name).replace("\\", "/")
    if not raw:
        return "."
    rooted = raw.startswith("/")

    parts = []
    for part in raw.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append(part)
            continue
        parts.append(part)

    joined = "/".join(parts)
    if rooted:
        return "/" + joined
    return joined or "."


def base_name(name: str) -> str:
    """Return the last element of a cleaned path (``"/"`` for the root)."""
    cleaned = clean_path(name)
    if cleaned == "/":
        return "/"
    return PurePosixPath(cleaned).name or cleaned


def local_join(root: str, name: str) -> str:
    """Join a canonical asset path onto a filesystem root."""
    rel = clean_path("/" + str(name)).lstrip("/")
    if not rel:
        return os.path.normpath(root)
    return os.path.join(root, *rel.split("/"))
