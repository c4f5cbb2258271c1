"""
Backend API client package.

Re-exports the client and the endpoint bundle so pages can write
``from foundation_console.api import FoundationAPI, unwrap``.
"""

from __future__ import annotations

from foundation_console.api.client import ApiClient, multipart_parts, unwrap, upload_file
from foundation_console.api.resources import FoundationAPI

__all__ = ["ApiClient", "FoundationAPI", "multipart_parts", "unwrap", "upload_file"]
