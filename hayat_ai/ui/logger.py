"""Streamlit debug console for generation calls."""

import logging
from datetime import datetime

import streamlit as st

DEBUG_LOGGER_NAME = "hayat_ai.ui.debug"


class StreamlitLogHandler(logging.Handler):
    """Logging handler that mirrors records into a Streamlit container."""

    STYLES = {
        logging.ERROR: ("error", "❌"),
        logging.WARNING: ("warning", "⚠️"),
        logging.INFO: ("info", "ℹ️"),
        logging.DEBUG: ("write", "🔍"),
    }

    def __init__(self, container: st.delta_generator.DeltaGenerator):
        super().__init__(level=logging.DEBUG)
        self.container = container
        self.logs = []

    def emit(self, record: logging.LogRecord):
        message = record.getMessage()
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        self.logs.append(f"[{timestamp}] {record.levelname}: {message}")

        method, emoji = self.STYLES.get(record.levelno, ("write", ""))
        getattr(self.container, method)(f"{emoji} {message}".strip())


def streamlit_logger(container: st.delta_generator.DeltaGenerator) -> logging.Logger:
    """
    Logger writing to the given container for the current page run.

    Records still propagate to the process log configured by setup_logging.
    """
    logger = logging.getLogger(DEBUG_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    # Streamlit reruns the page script, keep only this run's console
    logger.handlers = [StreamlitLogHandler(container)]
    return logger
