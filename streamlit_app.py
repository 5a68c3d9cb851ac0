# =============================================================================
# SIRAW LINKS - LINK-IN-BIO PROFILE WITH LIVE VIEW COUNTER
# =============================================================================
# Features:
# - Profile header, social icons and link cards
# - Unique visitors counted once (visitor id kept per browser)
# - Live eye counter that pulses when the count changes
# =============================================================================

import streamlit as st
import structlog

from app_components import AuthComponent, ProfileComponent, VisitorStatsComponent, apply_theme_css
from core.config import get_settings
from core.document_store import MemoryDocumentStore
from core.logging_utils import configure_logging
from core.profile import SIRAW_PROFILE

# =============================================================================
# PAGE CONFIGURATION
# =============================================================================
st.set_page_config(
    page_title="siraw",
    page_icon="👁️",
    layout="centered"
)

settings = get_settings()


@st.cache_resource
def setup_logging(level: str):
    configure_logging(level)
    return structlog.get_logger()


@st.cache_resource
def shared_memory_store() -> MemoryDocumentStore:
    """Process-wide store for the ``memory`` backend, shared by all sessions."""
    return MemoryDocumentStore()


logger = setup_logging(settings.log_level)
apply_theme_css()

# =============================================================================
# STORE SESSION: counting waits until the store handle is ready
# =============================================================================
auth = AuthComponent(settings, memory_store=shared_memory_store())
store_session = auth.render()

# =============================================================================
# VIEW COUNTER
# =============================================================================
visitor_stats = VisitorStatsComponent(store_session, settings)

show_counter = st.sidebar.toggle("👁️ Show live view counter", value=True, key="show_counter")

if show_counter:
    try:
        visitor_stats.render_badge()
    except Exception as e:
        # The counter is decorative; never block the page on it
        logger.error("View counter failed to render", error=str(e))
else:
    visitor_stats.teardown()

# =============================================================================
# PROFILE
# =============================================================================
ProfileComponent(SIRAW_PROFILE).render()
