"""Hayat Ai - chat, image, video and web-app generation on Gemini."""

__version__ = "1.0.0"
