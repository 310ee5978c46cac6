from __future__ import annotations

from typing import Any, Mapping


def read_path(obj: Mapping[str, Any], path: str) -> Any:
    """Resolve a dot-separated ``path`` against nested mappings.

    Returns ``None`` when any segment is missing or traverses a non-mapping.
    """
    current: Any = obj
    for key in str(path or "").split("."):
        if not key:
            continue
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current
