"""
Logger Configuration Module

Handles logging setup for search operations.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def create_logger(log_dir: str = "logs") -> logging.Logger:
    # Create logs directory if it doesn't exist
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    # Pipeline logger gets the detailed format, including httpx traffic
    pipeline_handler = logging.FileHandler(
        Path(log_dir) / "search_pipeline.log", encoding="utf-8"
    )
    pipeline_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    httpx_logger = logging.getLogger("httpx")
    httpx_logger.setLevel(logging.INFO)
    httpx_logger.addHandler(pipeline_handler)

    # Create search logger; component loggers are children of it
    search_logger = logging.getLogger("search")
    search_logger.setLevel(logging.DEBUG)
    search_logger.addHandler(pipeline_handler)

    # Create file handler for completed searches
    results_handler = logging.FileHandler(
        Path(log_dir) / "search_results.log", encoding="utf-8"
    )
    results_handler.setFormatter(logging.Formatter("%(message)s"))
    results_handler.setLevel(logging.INFO)
    results_handler.addFilter(lambda record: record.name == "search")
    search_logger.addHandler(results_handler)

    return search_logger


search_logger: logging.Logger | None = None


def setup_logging() -> logging.Logger:
    global search_logger
    if search_logger is None:
        search_logger = create_logger()
    return search_logger
