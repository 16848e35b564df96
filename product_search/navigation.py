from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

from product_search.config import SEARCH_PARAM, SEARCH_PATH


def encode_query(value: str) -> str:
    # Same character set as JavaScript's encodeURIComponent
    return quote(value, safe="!*'()")


@dataclass(frozen=True)
class NavigationEvent:
    query: str
    path: str = SEARCH_PATH
    param: str = SEARCH_PARAM

    @property
    def url(self) -> str:
        return f"{self.path}?{self.param}={encode_query(self.query)}"


class ListMode(Enum):
    EMPTY = "empty"
    SUGGESTIONS = "suggestions"
    HISTORY_AND_POPULAR = "history_and_popular"


@dataclass(frozen=True)
class NavigableList:
    """
    Candidates reachable with the arrow keys, plus the selected index.
    ``-1`` means nothing is selected and Enter searches the typed text.
    """

    items: Tuple[str, ...] = ()
    selected_index: int = -1
    mode: ListMode = ListMode.EMPTY
    recent_count: int = field(default=0, compare=False)

    @classmethod
    def build(
        cls,
        mode: ListMode,
        suggestions: Sequence[str] = (),
        recent: Sequence[str] = (),
        popular: Sequence[str] = (),
    ) -> "NavigableList":
        if mode is ListMode.SUGGESTIONS:
            return cls(items=tuple(suggestions), mode=mode)
        if mode is ListMode.HISTORY_AND_POPULAR:
            return cls(items=tuple(recent) + tuple(popular), mode=mode, recent_count=len(recent))
        return cls()

    def __len__(self) -> int:
        return len(self.items)

    @property
    def selected(self) -> Optional[str]:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None

    def move_down(self) -> "NavigableList":
        if self.selected_index < len(self.items) - 1:
            return self._select(self.selected_index + 1)
        return self

    def move_up(self) -> "NavigableList":
        if self.selected_index > 0:
            return self._select(self.selected_index - 1)
        return self._select(-1)

    def reset(self) -> "NavigableList":
        return self._select(-1)

    def _select(self, index: int) -> "NavigableList":
        return NavigableList(self.items, index, self.mode, self.recent_count)

    def as_list(self) -> List[str]:
        return list(self.items)
