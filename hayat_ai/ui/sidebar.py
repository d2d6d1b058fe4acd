"""Shared sidebar and startup checks for all pages."""

import logging
from typing import Optional

import streamlit as st

from hayat_ai import __version__
from hayat_ai.config import Settings, get_settings
from hayat_ai.ui.logger import streamlit_logger
from hayat_ai.utils.exceptions import StartupConfigError
from hayat_ai.utils.logger import setup_logging


def require_settings() -> Settings:
    """Load settings or stop the page when the API key is missing.

    Call at the top of every page after set_page_config.
    """
    try:
        settings = get_settings()
    except StartupConfigError as e:
        st.error(f"⚠️ {str(e)} Set it in the environment or a .env file and restart the app.")
        st.stop()
    setup_logging(settings.log_level)
    return settings


def render_sidebar(settings: Settings) -> bool:
    """Render the standard sidebar. Returns whether debug mode is on."""
    with st.sidebar:
        st.title("✨ Hayat Ai")

        if 'debug_mode' not in st.session_state:
            st.session_state.debug_mode = False

        st.session_state.debug_mode = st.toggle(
            "🔍 Debug Mode",
            value=st.session_state.debug_mode,
            help="Show detailed API communication logs"
        )

        with st.expander("⚙️ Models"):
            st.caption(f"Chat: {settings.chat_model}")
            st.caption(f"Image: {settings.image_model}")
            st.caption(f"Video: {settings.video_model}")
            st.caption(f"Web app: {settings.document_model}")

        st.divider()
        st.caption(f"Powered by Hayat Khan · v{__version__}")

    return st.session_state.debug_mode


def debug_logger(debug_mode: bool) -> Optional[logging.Logger]:
    """Create a debug console logger below the current element when enabled."""
    if not debug_mode:
        return None
    with st.expander("🔍 Debug Console", expanded=True):
        return streamlit_logger(st.container())
