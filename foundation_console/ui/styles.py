"""
UI styling (CSS injected via st.markdown).
"""

from __future__ import annotations

import streamlit as st

PRIMARY = "#1a237e"
PRIMARY_LIGHT = "#534bae"
SECONDARY = "#c2185b"

THEME_CSS = f"""
<style>
  :root {{
    --primary: {PRIMARY};
    --primary-light: {PRIMARY_LIGHT};
    --secondary: {SECONDARY};
    --bg-secondary: #f5f5f5;
    --text-secondary: #6b7280;
    --border-color: #e5e7eb;
    --success: #2e7d32;
    --warning: #ed6c02;
    --shadow-color: rgba(26, 35, 126, 0.12);
  }}
</style>
"""

BASE_CSS = """
<style>
  .hero {
    background: linear-gradient(45deg, var(--primary) 30%, var(--primary-light) 90%);
    color: #ffffff;
    padding: 3rem 1.5rem;
    border-radius: 12px;
    text-align: center;
    margin-bottom: 2rem;
  }
  .hero h1 { color: #ffffff; font-weight: 700; text-shadow: 2px 2px 4px rgba(0,0,0,0.2); }
  .hero p { color: rgba(255,255,255,0.9); font-size: 1.1rem; max-width: 800px; margin: 0 auto; }

  .section-title {
    color: var(--primary);
    font-weight: 700;
    border-bottom: 3px solid var(--secondary);
    display: inline-block;
    padding-bottom: 0.25rem;
    margin-bottom: 1rem;
  }

  .stat-card {
    background: var(--bg-secondary);
    border-radius: 12px;
    padding: 1.25rem;
    text-align: center;
    box-shadow: 0 2px 8px var(--shadow-color);
  }
  .stat-card .value { font-size: 2rem; font-weight: 700; color: var(--primary); }
  .stat-card .label { color: var(--text-secondary); font-size: 0.9rem; }

  .status-chip {
    display: inline-block;
    padding: 0.1rem 0.6rem;
    border-radius: 999px;
    font-size: 0.75rem;
    font-weight: 600;
    color: #ffffff;
  }
  .status-open { background: var(--success); }
  .status-closed { background: #9e9e9e; }

  .role-badge {
    display: inline-block;
    padding: 0.15rem 0.75rem;
    border-radius: 999px;
    background: var(--primary);
    color: #ffffff;
    font-size: 0.8rem;
    font-weight: 600;
  }

  .muted { color: var(--text-secondary); }
  .closed-listing { font-style: italic; color: var(--text-secondary); }
</style>
"""


def apply_styles() -> None:
    st.markdown(THEME_CSS, unsafe_allow_html=True)
    st.markdown(BASE_CSS, unsafe_allow_html=True)
