"""Utility functions for the dashboard."""
import logging
from datetime import datetime

from src.config import LOG_DIR


def setup_logger(name: str = __name__) -> logging.Logger:
    """Set up and return a logger instance."""
    log_file = LOG_DIR / f"dashboard_{datetime.now().strftime('%Y%m%d')}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    # File handler
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.INFO)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)

    # Formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def format_currency(value: float) -> str:
    """
    Format a USD amount for display.

    Values below 1 keep between 4 and 6 decimals so sub-cent prices stay
    readable; everything else uses 2.
    """
    sign = "-" if value < 0 else ""
    value = abs(value)
    if value < 1:
        text = f"{value:,.6f}"
        whole, frac = text.split(".")
        frac = frac.rstrip("0").ljust(4, "0")
        return f"{sign}${whole}.{frac}"
    return f"{sign}${value:,.2f}"


def format_percent(value: float) -> str:
    """Format a signed percentage change, e.g. +2.35%."""
    prefix = "+" if value >= 0 else ""
    return f"{prefix}{value:.2f}%"
