"""
product_search/controller.py
----------------------------

State machine behind the search box autocomplete dropdown.

While the user types, the raw text drives live suggestions (debounced). An
empty box shows recent searches and popular terms instead. Keyboard and
pointer selection end in ``execute_search``, which sanitizes the chosen text,
records it in history and emits a navigation event.
"""

import asyncio
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel

from product_search.config import (
    DEBOUNCE_SECONDS,
    MIN_MATCH_LENGTH,
    POPULAR_SHOWN,
    RECENT_SHOWN,
    SUGGESTION_LIMIT,
)
from product_search.debounce import Debouncer
from product_search.history import HistoryStore, default_history
from product_search.logging_utils import get_logger
from product_search.models import ProductRecord
from product_search.navigation import ListMode, NavigableList, NavigationEvent
from product_search.sanitizer import sanitize
from product_search.suggestions import popular_terms, suggest

logger = get_logger("controller")


class DropdownState(str, Enum):
    IDLE = "idle"
    TYPING = "typing"
    LOADING = "loading"
    SHOWING_SUGGESTIONS = "showing_suggestions"
    SHOWING_HISTORY_AND_POPULAR = "showing_history_and_popular"
    SHOWING_NO_RESULTS = "showing_no_results"


class Key(str, Enum):
    DOWN = "ArrowDown"
    UP = "ArrowUp"
    ENTER = "Enter"
    ESCAPE = "Escape"


class DropdownView(BaseModel):
    """Everything a renderer needs to draw the dropdown."""
    state: DropdownState
    query: str
    is_open: bool
    is_loading: bool
    suggestions: List[str]
    recent: List[str]
    popular: List[str]
    candidates: List[str]
    selected_index: int
    message: Optional[str] = None


class SuggestionController:
    def __init__(
        self,
        products: Optional[List[ProductRecord]] = None,
        history: Optional[HistoryStore] = None,
        navigate: Optional[Callable[[NavigationEvent], None]] = None,
        on_search_executed: Optional[Callable[[str], None]] = None,
        on_dropdown_close: Optional[Callable[[], None]] = None,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        suggestion_limit: int = SUGGESTION_LIMIT,
        recent_shown: int = RECENT_SHOWN,
        popular_shown: int = POPULAR_SHOWN,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.history = history if history is not None else default_history()
        self.navigate = navigate
        self.on_search_executed = on_search_executed
        self.on_dropdown_close = on_dropdown_close
        self.suggestion_limit = suggestion_limit
        self.recent_shown = recent_shown
        self.popular_shown = popular_shown

        self.products: List[ProductRecord] = []
        self.query = ""
        self.suggestions: List[str] = []
        self.recent: List[str] = self.history.recent()
        self.popular: List[str] = []
        self.is_open = False
        self.is_loading = False
        self.state = DropdownState.IDLE
        self.candidates = NavigableList()
        # Escape or click-outside: a pass still in flight must not reopen
        self._dismissed = False
        self._debouncer = Debouncer(debounce_seconds, loop)

        self.set_products(products or [])

    ############################################################################
    # Data sources
    ############################################################################

    @property
    def recent_view(self) -> List[str]:
        return self.recent[: self.recent_shown]

    @property
    def popular_view(self) -> List[str]:
        return self.popular[: self.popular_shown]

    def set_products(self, products: List[ProductRecord]) -> None:
        self.products = list(products)
        self.popular = popular_terms(self.products, self.popular_shown) if self.products else []
        if not self.query:
            self._rest(keep_open=self.is_open)
        elif len(self.query.strip()) >= MIN_MATCH_LENGTH:
            # Suggestions on screen came from the old catalog
            self.is_loading = True
            self._rebuild()
            self._debouncer.schedule(self._load_suggestions, self.query)
        else:
            self._rebuild()

    def _refresh_recent(self) -> None:
        self.recent = self.history.recent()

    ############################################################################
    # State transitions
    ############################################################################

    def _rest(self, keep_open: bool) -> None:
        """Empty query: show history and popular terms if there are any."""
        if self.recent_view or self.popular_view:
            self.state = DropdownState.SHOWING_HISTORY_AND_POPULAR
            self.is_open = keep_open
        else:
            self.state = DropdownState.IDLE
            self.is_open = False
        self._rebuild()

    def _rebuild(self) -> None:
        """Recompute the arrow-key candidates from what is on screen."""
        if self.suggestions and self.state in (
            DropdownState.SHOWING_SUGGESTIONS,
            DropdownState.TYPING,
            DropdownState.LOADING,
        ):
            self.candidates = NavigableList.build(ListMode.SUGGESTIONS, suggestions=self.suggestions)
        elif self.state is DropdownState.SHOWING_HISTORY_AND_POPULAR:
            self.candidates = NavigableList.build(
                ListMode.HISTORY_AND_POPULAR, recent=self.recent_view, popular=self.popular_view
            )
        else:
            self.candidates = NavigableList()

    def focus(self) -> None:
        self._dismissed = False
        self._refresh_recent()
        if not self.query:
            self._rest(keep_open=True)
        else:
            self.is_open = self.state is not DropdownState.IDLE

    def input(self, text: str) -> None:
        """A keystroke changed the box to ``text``."""
        self.query = text or ""
        self._dismissed = False
        self._debouncer.cancel()

        if len(self.query.strip()) >= MIN_MATCH_LENGTH:
            self.is_loading = True
            self.state = DropdownState.TYPING
            self._rebuild()
            self._debouncer.schedule(self._load_suggestions, self.query)
        elif not self.query:
            self.suggestions = []
            self.is_loading = False
            self._rest(keep_open=True)
        else:
            # One character: too noisy to match anything
            self.suggestions = []
            self.is_loading = False
            self.is_open = False
            self.state = DropdownState.IDLE
            self._rebuild()

    def _load_suggestions(self, text: str) -> None:
        """Debounce elapsed: show the loading state, match on the next loop turn."""
        self.state = DropdownState.LOADING
        self.is_loading = True
        self._rebuild()
        self._debouncer.schedule(self._apply_suggestions, text, delay=0)

    def _apply_suggestions(self, text: str) -> None:
        try:
            results = suggest(self.products, text, self.suggestion_limit)
        except Exception as e:
            # A failed pass shows an empty dropdown rather than breaking input
            logger.error(f"Suggestion pass failed for '{text}': {e}")
            results = []

        self.suggestions = results
        self.is_loading = False
        self.is_open = not self._dismissed
        self.state = DropdownState.SHOWING_SUGGESTIONS if results else DropdownState.SHOWING_NO_RESULTS
        self._rebuild()
        logger.debug(f"{len(results)} suggestions for '{text}'")

    def key(self, key: Key) -> Optional[NavigationEvent]:
        try:
            key = Key(key)
        except ValueError:
            return None
        if key is Key.DOWN:
            self.candidates = self.candidates.move_down()
        elif key is Key.UP:
            self.candidates = self.candidates.move_up()
        elif key is Key.ENTER:
            selected = self.candidates.selected
            return self.execute_search(selected if selected is not None else self.query)
        elif key is Key.ESCAPE:
            self.is_open = False
            self._dismissed = True
            if self.on_dropdown_close:
                self.on_dropdown_close()
        return None

    def click(self, candidate: str) -> Optional[NavigationEvent]:
        return self.execute_search(candidate)

    def click_outside(self) -> None:
        self.is_open = False
        self._dismissed = True

    def execute_search(self, text: Optional[str] = None) -> Optional[NavigationEvent]:
        sanitized = sanitize(text or self.query)
        if not sanitized:
            return None

        self.history.record(sanitized)
        event = NavigationEvent(query=sanitized)
        logger.info(f"Search executed: {event.url}")
        if self.navigate:
            self.navigate(event)
        if self.on_search_executed:
            self.on_search_executed(sanitized)

        self._debouncer.cancel()
        self.query = ""
        self.suggestions = []
        self.is_loading = False
        self._refresh_recent()
        self._rest(keep_open=False)
        if self.on_dropdown_close:
            self.on_dropdown_close()
        return event

    def clear_input(self) -> None:
        self._dismissed = False
        self._debouncer.cancel()
        self.query = ""
        self.suggestions = []
        self.is_loading = False
        self._refresh_recent()
        self._rest(keep_open=True)

    def clear_history(self) -> None:
        self.history.clear()
        self.recent = []
        if not self.query:
            self._rest(keep_open=self.is_open)
        else:
            self._rebuild()

    ############################################################################
    # Rendering
    ############################################################################

    @property
    def selected_index(self) -> int:
        return self.candidates.selected_index

    def view(self) -> DropdownView:
        message = None
        if self.state is DropdownState.SHOWING_NO_RESULTS:
            message = f'No suggestions found for "{self.query}"'
        show_resting = not self.query and self.state is DropdownState.SHOWING_HISTORY_AND_POPULAR
        recent: List[str] = []
        popular: List[str] = []
        if show_resting:
            items = self.candidates.as_list()
            recent = items[: self.candidates.recent_count]
            popular = items[self.candidates.recent_count :]
        return DropdownView(
            state=self.state,
            query=self.query,
            is_open=self.is_open,
            is_loading=self.is_loading,
            suggestions=list(self.suggestions),
            recent=recent,
            popular=popular,
            candidates=self.candidates.as_list(),
            selected_index=self.candidates.selected_index,
            message=message,
        )
