"""Configuration management for the VivaTech scraper."""

import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# ENDPOINTS
# =============================================================================

SPEAKERS_API_URL = os.getenv(
    "VIVATECH_SPEAKERS_API_URL",
    "https://vivatechnology.com/api/speakers"
)
PARTNERS_API_URL = os.getenv(
    "VIVATECH_PARTNERS_API_URL",
    "https://vivatechnology.com/api/partners"
)

# Public pages that embed the same records as escaped JSON
SPEAKERS_PAGE_URL = os.getenv("VIVATECH_SPEAKERS_PAGE_URL", "https://vivatechnology.com/speakers")
PARTNERS_PAGE_URL = os.getenv("VIVATECH_PARTNERS_PAGE_URL", "https://vivatechnology.com/partners")

DEFAULT_SPEAKERS_OUTPUT = "vivatech_speakers_2025_extended.csv"
DEFAULT_PARTNERS_OUTPUT = "vivatech_partners_2025.csv"
DEBUG_HTML_FILE = "debug_vivatech_page.html"

# =============================================================================
# HTTP / PAGINATION
# =============================================================================

USER_AGENT = os.getenv(
    "VIVATECH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)
PAGE_SIZE = int(os.getenv("VIVATECH_PAGE_SIZE", "100"))
MAX_PAGES = int(os.getenv("VIVATECH_MAX_PAGES", "500"))
MAX_RETRIES = int(os.getenv("VIVATECH_MAX_RETRIES", "3"))  # total attempts per request
RETRY_DELAY = float(os.getenv("VIVATECH_RETRY_DELAY", "1.0"))  # seconds, multiplied by attempt
REQUEST_TIMEOUT = float(os.getenv("VIVATECH_REQUEST_TIMEOUT", "30"))

# =============================================================================
# VALIDATION
# =============================================================================

def validate_http_config() -> bool:
    """Check that retry and pagination settings are usable."""
    return MAX_RETRIES >= 1 and PAGE_SIZE >= 1 and MAX_PAGES >= 1 and REQUEST_TIMEOUT > 0
