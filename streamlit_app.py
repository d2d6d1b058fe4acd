"""Hayat Ai - Streamlit Application"""

import streamlit as st

from hayat_ai.ui.sidebar import render_sidebar, require_settings

# Page configuration
st.set_page_config(
    page_title="Hayat Ai",
    page_icon="✨",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 3rem;
        font-weight: bold;
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        text-align: center;
        padding: 1rem 0;
    }
    .info-box {
        padding: 1rem;
        background-color: #d1ecf1;
        border: 1px solid #bee5eb;
        border-radius: 0.5rem;
        color: #0c5460;
    }
</style>
""", unsafe_allow_html=True)

# Missing API_KEY stops here
settings = require_settings()
render_sidebar(settings)

# Main content
st.markdown('<h1 class="main-header">✨ Hayat Ai</h1>', unsafe_allow_html=True)

st.markdown("""
<div class="info-box">
    <strong>Welcome to Hayat Ai!</strong><br>
    Create with AI in four ways:
    <ul>
        <li><strong>Chat</strong> - Talk with your creative AI assistant</li>
        <li><strong>Create Image</strong> - Turn a description into a picture</li>
        <li><strong>Create Video</strong> - Generate a short video from text or a starting image</li>
        <li><strong>App Builder</strong> - Describe a web app and get a single HTML file</li>
    </ul>
    👈 <strong>Select a page from the sidebar to get started!</strong>
</div>
""", unsafe_allow_html=True)

# Footer
st.divider()
st.caption("Powered by Hayat Khan | Built with Streamlit and Google Gemini")
