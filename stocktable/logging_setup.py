"""Logging configuration shared by the web app and the CLI scripts."""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure logging with timestamp and severity level."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
