"""
product_search/config.py
------------------------

Runtime settings for search, suggestions and history. Every value can be
overridden through the environment.
"""

import os
from pathlib import Path

################################################################################
# Ranking
################################################################################

# Fuzziness: 0.0 = exact match, 1.0 = match anything
DEFAULT_THRESHOLD = float(os.getenv("SEARCH_THRESHOLD", "0.4"))
# Minimum relevance a ranked product needs to be returned
DEFAULT_MIN_SCORE = float(os.getenv("SEARCH_MIN_SCORE", "0.3"))
MIN_MATCH_LENGTH = 2

# Field path -> weight. Ratios matter more than absolute values.
FIELD_WEIGHTS = {
    "title": 2.0,
    "description": 1.5,
    "brand.name": 1.2,
    "category_name": 1.0,
    "tags": 0.8,
    "specifications.cpu": 0.7,
    "specifications.gpu": 0.7,
    "specifications.ram": 0.6,
    "specifications.storage": 0.6,
}

################################################################################
# Autocomplete
################################################################################

DEBOUNCE_SECONDS = int(os.getenv("SEARCH_DEBOUNCE_MS", "300")) / 1000
SUGGESTION_LIMIT = int(os.getenv("SUGGESTION_LIMIT", "8"))
RECENT_SHOWN = 5
POPULAR_SHOWN = 5
MAX_QUERY_LENGTH = 100

# Navigation target for a completed search
SEARCH_PATH = "/products"
SEARCH_PARAM = "search"

################################################################################
# History
################################################################################

HISTORY_KEY = "recentSearches"
HISTORY_LIMIT = 10
HISTORY_PATH = Path(
    os.getenv("SEARCH_HISTORY_PATH", str(Path.home() / ".storefront_search" / "storage.json"))
)

################################################################################
# Service
################################################################################

CATALOG_PATH = os.getenv("CATALOG_PATH", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8010"))
