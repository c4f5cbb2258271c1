"""
Streamlit UI package.

Entry point: ``streamlit run foundation_console/app.py``.
"""

from __future__ import annotations
