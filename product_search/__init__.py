from product_search.controller import DropdownState, DropdownView, Key, SuggestionController
from product_search.highlight import highlight_matches
from product_search.history import HistoryStore, SearchHistory, default_history
from product_search.matcher import FuzzyMatcher, RapidFuzzMatcher
from product_search.models import MatchResult, MatchSpan, ProductRecord, SearchOptions
from product_search.navigation import NavigableList, NavigationEvent
from product_search.ranking import ranked_results, search
from product_search.sanitizer import sanitize
from product_search.storage import JsonFileStorage, MemoryStorage, StorageError
from product_search.suggestions import popular_terms, suggest

__all__ = [
    "DropdownState",
    "DropdownView",
    "FuzzyMatcher",
    "HistoryStore",
    "JsonFileStorage",
    "Key",
    "MatchResult",
    "MatchSpan",
    "MemoryStorage",
    "NavigableList",
    "NavigationEvent",
    "ProductRecord",
    "RapidFuzzMatcher",
    "SearchHistory",
    "SearchOptions",
    "StorageError",
    "SuggestionController",
    "default_history",
    "highlight_matches",
    "popular_terms",
    "ranked_results",
    "sanitize",
    "search",
    "suggest",
]
