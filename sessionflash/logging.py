"""Basic logging configuration."""

import logging


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    # Uvicorn keeps its own access log config
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
