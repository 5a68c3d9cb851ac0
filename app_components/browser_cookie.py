"""
Siraw Links - Browser Cookie Writer
====================================
Writes small values back to the visitor's browser so the next page
load sends them as request cookies.
"""

import json

import streamlit.components.v1 as components
import structlog

logger = structlog.get_logger()

# Two years, in seconds
COOKIE_MAX_AGE = 60 * 60 * 24 * 365 * 2


def cookie_script(key: str, value: str, max_age: int = COOKIE_MAX_AGE) -> str:
    """HTML snippet that sets ``key`` as a site-wide cookie and in localStorage."""
    return f"""
    <script>
    (function() {{
        var key = {json.dumps(key)};
        var value = {json.dumps(value)};
        var doc = document;
        try {{
            doc = window.parent.document;
        }} catch (e) {{}}
        doc.cookie = encodeURIComponent(key) + "=" + encodeURIComponent(value)
            + "; path=/; max-age={int(max_age)}; SameSite=Lax";
        try {{
            window.parent.localStorage.setItem(key, value);
        }} catch (e) {{}}
    }})();
    </script>
    """


def set_browser_cookie(key: str, value: str, max_age: int = COOKIE_MAX_AGE):
    """Render a zero-height component that stores the cookie in the browser."""
    components.html(cookie_script(key, value, max_age), height=0)
    logger.debug("Queued browser cookie", key=key)
