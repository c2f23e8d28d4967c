"""
Colored console logging with emojis and structured formatting.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from cardmatch.config import get_settings


class ColorFormatter(logging.Formatter):
    """Custom formatter with colors and emojis for terminal output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
        "BOLD": "\033[1m",
        "DIM": "\033[2m",
    }

    EMOJIS = {
        "DEBUG": "🔍",
        "INFO": "✅",
        "WARNING": "⚠️",
        "ERROR": "❌",
        "CRITICAL": "🚨",
    }

    # Component emojis, detected from the logger name
    COMPONENT_EMOJIS = {
        "detector": "🃏",
        "extractor": "🔎",
        "matcher": "🎯",
        "engine": "⚙️",
        "catalog": "📚",
        "processor": "📦",
        "api": "🌐",
        "supabase": "💾",
    }

    def format(self, record):
        level_color = self.COLORS.get(record.levelname, "")
        reset = self.COLORS["RESET"]
        bold = self.COLORS["BOLD"]
        dim = self.COLORS["DIM"]

        emoji = self.EMOJIS.get(record.levelname, "📝")

        component_emoji = ""
        for component, comp_emoji in self.COMPONENT_EMOJIS.items():
            if component in record.name.lower():
                component_emoji = comp_emoji
                break

        timestamp = datetime.now().strftime("%H:%M:%S")
        level = f"{record.levelname:<8}"
        logger_name = record.name.split(".")[-1][:12]

        formatted_msg = (
            f"{dim}[{timestamp}]{reset} "
            f"{emoji} {level_color}{bold}{level}{reset} "
            f"{dim}│{reset} "
            f"{component_emoji} {bold}{logger_name:<12}{reset} "
            f"{dim}│{reset} "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            formatted_msg += f"\n{self.formatException(record.exc_info)}"

        return formatted_msg


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Setup a logger with colors and emojis.

    Args:
        name: Logger name (usually "cardmatch.<component>")
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the configured LOG_LEVEL setting.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    level_name = (level or get_settings().log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(ColorFormatter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def log_api_request(
    logger: logging.Logger, method: str, endpoint: str, params: Optional[dict] = None
):
    """Log API request in a compact format."""
    params_str = f" {params}" if params else ""
    logger.info(f"🌐 {method} {endpoint}{params_str}")


def log_batch_progress(logger: logging.Logger, current: int, total: int, title: str):
    """Log batch processing progress."""
    percentage = (current / total * 100) if total > 0 else 0
    logger.info(f"📦 Processing [{current}/{total}] {percentage:.1f}% - {title}")


# Module-level loggers
detector_logger = setup_logger("cardmatch.detector")
extractor_logger = setup_logger("cardmatch.extractor")
matcher_logger = setup_logger("cardmatch.matcher")
engine_logger = setup_logger("cardmatch.engine")
catalog_logger = setup_logger("cardmatch.catalog")
processor_logger = setup_logger("cardmatch.processor")
api_logger = setup_logger("cardmatch.api")
supabase_logger = setup_logger("cardmatch.supabase")


def log_success(logger: logging.Logger, message: str):
    """Log a successful outcome with an explicit [OK] tag."""
    logger.info(f"[OK] {message}")
