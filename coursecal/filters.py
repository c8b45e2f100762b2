"""Category filtering of event lists."""

from enum import Enum
from typing import Any, Iterable, Optional

from .categories import Vocabulary
from .models import Event


class FilterEngine:
    """
    Applies an active category selection to events.

    An EMPTY selection means "no filter": every event passes through in
    its original order. It does not mean "select none". Keep this in mind
    when wiring checkboxes, where an empty selection shows every box as
    checked.

    Attributes:
        vocabulary: Category vocabulary used to resolve toggled values
        active: Currently selected categories
    """

    def __init__(
        self, vocabulary: Vocabulary, active: Optional[Iterable[Any]] = None
    ) -> None:
        self.vocabulary: Vocabulary = vocabulary
        self.active: frozenset = vocabulary.parse_many(active)

    @staticmethod
    def apply(
        events: list[Event], active_categories: Optional[Iterable[Any]]
    ) -> list[Event]:
        """
        Keep events whose category is in the active set.

        Args:
            events: Events to filter
            active_categories: Selected categories; empty or None disables filtering

        Returns:
            A new list with the surviving events, input order preserved
        """
        active = {_category_key(c) for c in active_categories or ()}
        if not active:
            return list(events)
        return [event for event in events if _selected(event.category, active)]

    def filter(self, events: list[Event]) -> list[Event]:
        return self.apply(events, self.active)

    def toggle(self, category: Any) -> frozenset:
        """Add the category to the selection, or remove it if present."""
        category = self.vocabulary.parse(category)
        if category in self.active:
            self.active = self.active - {category}
        else:
            self.active = self.active | {category}
        return self.active

    def clear(self) -> None:
        self.active = frozenset()

    def is_shown(self, category: Any) -> bool:
        """Whether events of this category currently pass the filter."""
        return not self.active or self.vocabulary.parse(category) in self.active


def _category_key(category: Any) -> tuple:
    # members of different vocabularies can share a string value
    if isinstance(category, Enum):
        return type(category), category.value
    return str, category


def _selected(category: Any, active: set) -> bool:
    if _category_key(category) in active:
        return True
    # a raw string selection matches by value
    return isinstance(category, Enum) and (str, category.value) in active
