"""Configuration settings for the arXiv query client."""

import logging
import os
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# arXiv API
ARXIV_BASE_URL = os.getenv("ARXIV_BASE_URL", "http://export.arxiv.org/api/query")

# arXiv asks clients to leave 3 seconds between requests
ARXIV_RATE_LIMIT_SECONDS = float(os.getenv("ARXIV_RATE_LIMIT_SECONDS", "3.0"))

# Total attempt budget per request
ARXIV_MAX_RETRIES = int(os.getenv("ARXIV_MAX_RETRIES", "3"))

ARXIV_TIMEOUT_SECONDS = float(os.getenv("ARXIV_TIMEOUT_SECONDS", "30.0"))


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper()),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
