"""
Logging configuration
"""
import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure application logging

    Args:
        level: Logging level (default: INFO)
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing configuration
    )

    # Configure uvicorn loggers
    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)

    # The stripe library logs every request at INFO when its own logger is enabled
    logging.getLogger("stripe").setLevel(max(level, logging.WARNING))
