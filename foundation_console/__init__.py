"""
Tenenghang Foundation console: public site and admin pages over the
foundation's REST API.
"""

__version__ = "1.0.0"
