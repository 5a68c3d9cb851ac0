"""
Siraw Links - App Components
=============================
UI components for the application.
"""

from .auth_component import AuthComponent
from .browser_cookie import set_browser_cookie
from .profile_component import ProfileComponent
from .theme_utils import apply_theme_css
from .visitor_stats import VisitorStatsComponent

__all__ = [
    'AuthComponent',
    'set_browser_cookie',
    'ProfileComponent',
    'apply_theme_css',
    'VisitorStatsComponent',
]
