"""
Streamlit entrypoint.

  streamlit run foundation_console/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    # `streamlit run foundation_console/app.py` puts the package directory on sys.path, not the repo root
    repo_root = str(Path(__file__).resolve().parents[1])
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ensure_repo_root_on_path()

from foundation_console.ui.app import main  # noqa: E402

if __name__ == "__main__":
    main()
