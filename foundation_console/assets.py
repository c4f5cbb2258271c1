"""
Asset URL resolution for images, PDFs and videos served by the backend.

The backend stores uploads either on a CDN (absolute URLs) or on its own
disk (paths such as ``/uploads/x.png``). Relative paths are prefixed with
the API host so they can be rendered directly.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from foundation_console.config import get_settings

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)

# Keys checked, in order, when an asset is a stored-file object
_ASSET_KEYS = ("url", "secure_url", "path")


def is_absolute_url(value: str) -> bool:
    return bool(_ABSOLUTE_URL.match(value))


def resolve_asset_url(value: Any, base_url: str | None = None) -> str | None:
    """
    Turn an asset reference into a URL the browser can load.

    Args:
        value: ``None``, a URL/path string, or a mapping with one of
            ``url``, ``secure_url`` or ``path``.
        base_url: Host prefix for relative paths; defaults to the
            configured API URL.

    Returns:
        The resolved URL, or ``None`` when nothing usable was given.
    """
    if not value:
        return None

    if isinstance(value, Mapping):
        candidate = next((value[key] for key in _ASSET_KEYS if value.get(key)), None)
        if not candidate:
            return None
    elif isinstance(value, str):
        candidate = value
    else:
        return None

    if not isinstance(candidate, str):
        return None
    if is_absolute_url(candidate):
        return candidate

    host = get_settings().api_url if base_url is None else base_url
    return f"{host}{candidate}"
