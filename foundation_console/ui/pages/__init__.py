"""
Page renderers, one module per area of the site.
"""

from __future__ import annotations
